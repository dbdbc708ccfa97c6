"""
Mediation error handling utilities.

Provides a decorator that maps domain exceptions onto HTTP responses
consistently across all mediation endpoints.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from fastapi import HTTPException, status

from mediator.core.exceptions import (
    AuthenticationError,
    GatewayError,
    MediatorException,
    NotFoundError,
    PersistenceError,
    ValidationError,
)
from mediator.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)

# Type for the decorated function
F = TypeVar("F", bound=Callable[..., Any])

_STATUS_BY_ERROR: list[tuple[type[MediatorException], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (AuthenticationError, status.HTTP_403_FORBIDDEN),
    (GatewayError, status.HTTP_502_BAD_GATEWAY),
    (PersistenceError, status.HTTP_503_SERVICE_UNAVAILABLE),
]


def status_for(error: MediatorException) -> int:
    """HTTP status code for a domain exception."""
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def handle_mediation_errors(func: F) -> F:
    """
    Decorator to transform domain errors into HTTPExceptions.

    This centralizes:
    - Logging of errors with their details
    - Mapping each error kind to an HTTP status code
    - Ensuring uniform error response formats
    """
    @functools.wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)

        except HTTPException:
            raise

        except MediatorException as e:
            code = status_for(e)
            level = logging.ERROR if code >= 500 else logging.WARNING
            logger.log(
                level,
                "Mediation request failed",
                extra={"error_type": type(e).__name__, "status_code": code},
            )
            raise HTTPException(status_code=code, detail=e.message)

        except Exception as e:
            log_exception_with_context(logger, "Unexpected failure in mediation operation", e)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="An internal error occurred",
            )

    return wrapper  # type: ignore
