"""
Response envelopes for ABOGA routes.

Every route answers with a StandardResponse. Domain failures are raised as
AbogaError subclasses; their message and details become the error envelope
and their class picks the status code.
"""

import time
from datetime import datetime, timezone
from typing import Any, List, Optional, Tuple, Type, Union

from fastapi import HTTPException

from aboga.core.exceptions import AbogaError, AuthenticationError, BackendError, NotFoundError
from aboga.schemas import ErrorResponse, Metadata, StandardResponse

# First match wins
ERROR_STATUS: List[Tuple[Type[AbogaError], int]] = [
    (AuthenticationError, 401),
    (NotFoundError, 404),
    (BackendError, 502),
]


def status_for(error: AbogaError) -> int:
    """Status code reported for a domain error; 500 when unmapped."""
    for error_type, status_code in ERROR_STATUS:
        if isinstance(error, error_type):
            return status_code
    return 500


def _metadata(status_code: int, errors: List[str], execution_time: float) -> Metadata:
    return Metadata(
        statusCode=status_code,
        errors=errors,
        executionTime=execution_time,
        timestamp=datetime.now(timezone.utc),
    )


def success_envelope(data: Any, status_code: int = 200, execution_time: float = 0.0) -> StandardResponse:
    return StandardResponse(data=data, metadata=_metadata(status_code, [], execution_time), success=1)


def error_envelope(
    message: str,
    status_code: int = 500,
    errors: Optional[List[str]] = None,
    details: Optional[dict] = None,
    execution_time: float = 0.0,
) -> StandardResponse:
    """Failure envelope; `errors` defaults to the message alone."""
    return StandardResponse(
        data=ErrorResponse(message=message, details=details),
        metadata=_metadata(status_code, errors or [message], execution_time),
        success=0,
    )


def error_from_exception(
    error: AbogaError,
    status_code: Optional[int] = None,
    execution_time: float = 0.0,
) -> StandardResponse:
    """Envelope for a domain error. Only mapping details are passed through."""
    details = error.details if isinstance(error.details, dict) else None
    return error_envelope(
        error.message,
        status_code=status_code or status_for(error),
        details=details,
        execution_time=execution_time,
    )


def http_error(error: Union[AbogaError, str], status_code: Optional[int] = None) -> HTTPException:
    """
    HTTPException whose detail is already an error envelope.

    Used from dependencies, where returning an envelope is not possible; the
    application's HTTPException handler sends the detail unchanged.
    """
    if isinstance(error, AbogaError):
        envelope = error_from_exception(error, status_code=status_code)
    else:
        envelope = error_envelope(error, status_code=status_code or 400)
    return HTTPException(
        status_code=envelope.metadata.statusCode,
        detail=envelope.model_dump(mode="json"),
    )


class ResponseTimer:
    """
    Times a route body and stamps the elapsed time on its envelope.

        with ResponseTimer() as timer:
            return timer.success(data)
    """

    def __init__(self):
        self.started = 0.0

    def __enter__(self):
        self.started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started

    def success(self, data: Any, status_code: int = 200) -> StandardResponse:
        return success_envelope(data, status_code=status_code, execution_time=self.elapsed)

    def error(
        self,
        message: str,
        status_code: int,
        errors: Optional[List[str]] = None,
        details: Optional[dict] = None,
    ) -> StandardResponse:
        return error_envelope(
            message,
            status_code=status_code,
            errors=errors,
            details=details,
            execution_time=self.elapsed,
        )

    def failure(self, error: AbogaError, status_code: Optional[int] = None) -> StandardResponse:
        return error_from_exception(error, status_code=status_code, execution_time=self.elapsed)
