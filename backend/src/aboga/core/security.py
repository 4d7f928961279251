"""
Authentication context and input validation for ABOGA.

Access tokens are issued by the hosted auth service; this module only
verifies them (HS256, shared secret) and turns the claims into an
AuthContext. A request without a token is an unauthenticated visitor.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from jose import JWTError, jwt

from aboga.core.config import BackendConfig
from aboga.core.exceptions import AuthenticationError
from aboga.schemas import Profile

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"
TOKEN_AUDIENCE = "authenticated"


@dataclass
class AuthUser:
    """Identity carried by a verified access token."""
    id: str
    email: Optional[str] = None
    is_anonymous: bool = False
    claims: Dict[str, Any] = field(default_factory=dict, repr=False)


@dataclass
class AuthContext:
    """
    Who is making the request.

    `user` is None for visitors. Anonymous sign-ins have a user id but do
    not count as authenticated for the free message quota.
    """
    user: Optional[AuthUser] = None
    access_token: Optional[str] = field(default=None, repr=False)
    profile: Optional[Profile] = None
    # Client-side storage keys a sign-out asks the caller to drop
    cleared_storage_keys: List[str] = field(default_factory=list)
    _teardown: List[Callable[[], None]] = field(default_factory=list, repr=False)

    @property
    def user_id(self) -> Optional[str]:
        return self.user.id if self.user else None

    @property
    def is_anonymous(self) -> bool:
        return self.user is not None and self.user.is_anonymous

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and not self.user.is_anonymous

    def on_sign_out(self, callback: Callable[[], None]) -> None:
        """Register a callback run when the user signs out."""
        self._teardown.append(callback)

    def sign_out(self) -> None:
        """Clear the user, token and profile, then run teardown callbacks."""
        self.user = None
        self.access_token = None
        self.profile = None
        callbacks, self._teardown = self._teardown, []
        for callback in callbacks:
            callback()


def get_token_safe(authorization: Optional[str]) -> Optional[str]:
    """Extract a bearer token from an Authorization header value."""
    try:
        if not authorization:
            return None

        scheme, token = authorization.split()
        if scheme.lower() != "bearer":
            return None

        return token
    except (ValueError, AttributeError):
        return None


def decode_access_token(token: str, config: BackendConfig) -> AuthUser:
    """Verify an access token and return its user."""
    if not config.supabase_jwt_secret:
        logger.error("Received an access token but SUPABASE_JWT_SECRET is not configured")
        raise AuthenticationError("Token verification is not configured")

    try:
        payload = jwt.decode(
            token,
            config.supabase_jwt_secret,
            algorithms=[TOKEN_ALGORITHM],
            audience=TOKEN_AUDIENCE,
        )
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
        raise AuthenticationError("Could not validate credentials") from e

    user_id = payload.get("sub")
    if not user_id:
        raise AuthenticationError("Could not validate credentials")

    return AuthUser(
        id=user_id,
        email=payload.get("email") or None,
        is_anonymous=bool(payload.get("is_anonymous", False)),
        claims=payload,
    )


def resolve_auth_context(authorization: Optional[str], config: BackendConfig) -> AuthContext:
    """Build the AuthContext for a request's Authorization header."""
    token = get_token_safe(authorization)
    if not token:
        return AuthContext()
    return AuthContext(user=decode_access_token(token, config), access_token=token)


class InputValidator:
    """Validates user-supplied text before it reaches the assistant."""

    @staticmethod
    def validate_query(query: str, max_length: int = 2000) -> str:
        """Trim a query; empty input comes back as an empty string."""
        if not isinstance(query, str):
            query = str(query)

        query = query.strip()
        if len(query) > max_length:
            query = query[:max_length]

        return query
