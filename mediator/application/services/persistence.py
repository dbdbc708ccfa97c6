"""
Persistence error translation for service methods.

Wraps SQLAlchemy failures into PersistenceError after rolling back the
service's unit of work, so callers never see a half-committed operation.
"""

import functools
import logging
from typing import Any, Callable, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from mediator.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def guard_persistence(operation: str) -> Callable[[F], F]:
    """
    Decorate an async service method whose instance exposes `db`.

    Args:
        operation: Name used in logs and in the raised PersistenceError
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            try:
                return await func(self, *args, **kwargs)
            except SQLAlchemyError as e:
                logger.error(
                    "Store operation failed",
                    extra={"operation": operation, "error_type": type(e).__name__},
                )
                await self.db.rollback()
                raise PersistenceError(f"Store operation failed: {operation}", operation=operation) from e

        return wrapper  # type: ignore

    return decorator
