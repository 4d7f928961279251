"""
Custom exceptions for ABOGA.
"""

from typing import Any, Optional


class AbogaError(Exception):
    """Base exception for ABOGA."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(AbogaError):
    """Required configuration is missing or invalid."""

    pass


class BackendError(AbogaError):
    """The data backend rejected or failed a request."""

    def __init__(self, message: str, status_code: Optional[int] = None, details: Optional[Any] = None):
        super().__init__(message, details=details)
        self.status_code = status_code


class GenerativeEndpointError(AbogaError):
    """The generative endpoint failed or returned an unusable reply."""

    pass


class AuthenticationError(AbogaError):
    """Authentication failed."""

    pass


class NotFoundError(AbogaError):
    """Resource not found."""

    pass

