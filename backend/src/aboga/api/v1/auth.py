import logging

from fastapi import APIRouter, Depends

from aboga.api.deps import get_app_config, get_auth_context, get_backend_client, get_data_store
from aboga.core.config import Config
from aboga.core.exceptions import AbogaError
from aboga.core.response_utils import ResponseTimer
from aboga.core.security import AuthContext
from aboga.schemas import AuthContextResponse, StandardResponse
from aboga.services.backend_client import HostedBackendClient
from aboga.services.data_store import DataStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/me", response_model=StandardResponse)
async def get_me(
    auth: AuthContext = Depends(get_auth_context),
    store: DataStore = Depends(get_data_store),
):
    """Describe the caller: visitor, anonymous sign-in or registered user."""
    with ResponseTimer() as timer:
        try:
            if auth.user_id:
                auth.profile = await store.get_profile(auth.user_id)

            return timer.success(
                AuthContextResponse(
                    user_id=auth.user_id,
                    email=auth.user.email if auth.user else None,
                    is_authenticated=auth.is_authenticated,
                    is_anonymous=auth.is_anonymous,
                    profile=auth.profile,
                )
            )

        except AbogaError as e:
            logger.error(f"Error resolving current user: {e.message}")
            return timer.failure(e)
        except Exception as e:
            logger.error(f"Error resolving current user: {e}")
            return timer.error("Failed to get current user", 500)


@router.post("/sign-out", response_model=StandardResponse)
async def sign_out(
    auth: AuthContext = Depends(get_auth_context),
    client: HostedBackendClient = Depends(get_backend_client),
    config: Config = Depends(get_app_config),
):
    """Sign out and tell the client which cached values to drop."""
    with ResponseTimer() as timer:
        try:
            if auth.access_token and not config.uses_sql_backend():
                await client.sign_out()

            # Teardown callbacks registered when the context was resolved run here
            auth.sign_out()

            return timer.success({"signed_out": True, "clear_storage_keys": auth.cleared_storage_keys})

        except AbogaError as e:
            logger.error(f"Error signing out: {e.message}")
            return timer.failure(e)
        except Exception as e:
            logger.error(f"Error signing out: {e}")
            return timer.error("Failed to sign out", 500)
