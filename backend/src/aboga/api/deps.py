"""
Shared FastAPI dependencies.
"""

import logging
from typing import Optional

import httpx
from fastapi import Depends, Header, Request

from aboga.core.config import Config, get_config
from aboga.core.constants import SESSION_STORAGE_KEY
from aboga.core.exceptions import AuthenticationError
from aboga.core.response_utils import http_error
from aboga.core.security import AuthContext, resolve_auth_context
from aboga.services.assistant import get_assistant
from aboga.services.backend_client import HostedBackendClient
from aboga.services.data_store import DataStore, HostedDataStore, SqlDataStore

logger = logging.getLogger(__name__)


def get_app_config() -> Config:
    return get_config()


def get_http_client(request: Request) -> httpx.AsyncClient:
    """Process-wide httpx client opened in the application lifespan."""
    return request.app.state.http_client


def forget_cached_session(auth: AuthContext) -> None:
    """Sign-out teardown: the client must drop its cached chat session id."""
    auth.cleared_storage_keys.append(SESSION_STORAGE_KEY)


def get_auth_context(
    authorization: Optional[str] = Header(None),
    config: Config = Depends(get_app_config),
) -> AuthContext:
    """Resolve the caller; no token means an unauthenticated visitor."""
    try:
        auth = resolve_auth_context(authorization, config.backend)
    except AuthenticationError as e:
        raise http_error(e, status_code=401)
    auth.on_sign_out(lambda: forget_cached_session(auth))
    return auth


def get_backend_client(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    auth: AuthContext = Depends(get_auth_context),
    config: Config = Depends(get_app_config),
) -> HostedBackendClient:
    return HostedBackendClient(config.backend, http_client, access_token=auth.access_token)


def get_data_store(
    request: Request,
    auth: AuthContext = Depends(get_auth_context),
    config: Config = Depends(get_app_config),
) -> DataStore:
    """Store for the configured backend, acting as the caller."""
    if config.uses_sql_backend():
        return SqlDataStore(request.app.state.session_factory)
    client = HostedBackendClient(config.backend, get_http_client(request), access_token=auth.access_token)
    return HostedDataStore(client)


def get_chat_assistant(
    http_client: httpx.AsyncClient = Depends(get_http_client),
    config: Config = Depends(get_app_config),
):
    """Assistant for the configured response strategy."""
    return get_assistant(config=config, http_client=http_client)
