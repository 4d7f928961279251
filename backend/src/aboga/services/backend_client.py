"""
HTTP client for the hosted database-as-a-service.

Talks to the REST data API (PostgREST conventions) and the auth API using
httpx. Row filters are equality-only, which is all the application needs.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from aboga.core.config import BackendConfig
from aboga.core.exceptions import BackendError

logger = logging.getLogger(__name__)


class HostedBackendClient:
    """
    Thin wrapper around the hosted REST data API.

    Requests are authorized with the public key; when a user access token is
    supplied it replaces the key in the Authorization header so row-level
    policies apply to that user.
    """

    def __init__(
        self,
        config: BackendConfig,
        http_client: httpx.AsyncClient,
        access_token: Optional[str] = None,
    ):
        self.config = config
        self.http_client = http_client
        self.access_token = access_token

    def with_token(self, access_token: Optional[str]) -> "HostedBackendClient":
        """Copy of this client acting on behalf of a user."""
        return HostedBackendClient(self.config, self.http_client, access_token=access_token)

    def _headers(self, prefer_representation: bool = False) -> Dict[str, str]:
        headers = {
            "apikey": self.config.supabase_anon_key,
            "Authorization": f"Bearer {self.access_token or self.config.supabase_anon_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if prefer_representation:
            headers["Prefer"] = "return=representation"
        return headers

    @staticmethod
    def _filters(eq: Optional[Dict[str, Any]]) -> Dict[str, str]:
        params = {}
        for column, value in (eq or {}).items():
            if isinstance(value, bool):
                value = str(value).lower()
            params[column] = f"eq.{value}"
        return params

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        try:
            response = await self.http_client.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Backend request {method} {url} failed: {e}")
            raise BackendError(f"Backend request failed: {e}") from e

        if response.is_error:
            detail: Any
            try:
                detail = response.json()
            except ValueError:
                detail = response.text
            logger.error(f"Backend returned {response.status_code} for {method} {url}: {detail}")
            raise BackendError(
                f"Backend request failed with status {response.status_code}",
                status_code=response.status_code,
                details=detail,
            )

        if not response.content:
            return None
        return response.json()

    async def select(
        self,
        table: str,
        eq: Optional[Dict[str, Any]] = None,
        order: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Select rows matching all equality filters."""
        params = {"select": "*", **self._filters(eq)}
        if order:
            params["order"] = f"{order}.{'desc' if descending else 'asc'}"
        if limit is not None:
            params["limit"] = str(limit)
        rows = await self._request("GET", f"{self.config.rest_url}/{table}", params=params, headers=self._headers())
        return rows or []

    async def select_one(self, table: str, eq: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Select at most one row; None when nothing matches."""
        rows = await self.select(table, eq=eq, limit=1)
        return rows[0] if rows else None

    async def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a row and return it as stored."""
        rows = await self._request(
            "POST",
            f"{self.config.rest_url}/{table}",
            json=row,
            headers=self._headers(prefer_representation=True),
        )
        if not rows:
            raise BackendError(f"Insert into {table} returned no row")
        return rows[0]

    async def update(self, table: str, values: Dict[str, Any], eq: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Update rows matching the filters and return them."""
        rows = await self._request(
            "PATCH",
            f"{self.config.rest_url}/{table}",
            params=self._filters(eq),
            json=values,
            headers=self._headers(prefer_representation=True),
        )
        return rows or []

    async def sign_out(self) -> None:
        """Revoke the current user's session on the auth API."""
        if not self.access_token:
            return
        await self._request("POST", f"{self.config.auth_url}/logout", headers=self._headers())
        logger.info("Signed out user session")
