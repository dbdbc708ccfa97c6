"""
CRUD operations for database models.

Exports base CRUD class and model-specific CRUD implementations
with pre-instantiated singletons for direct use.

Usage:
    from mediator.boundary.db.CRUD import session_crud, message_crud

    session = await session_crud.get_by_code(db, "K3X9QZ")
"""

from mediator.boundary.db.CRUD.base_crud import BaseCRUD
from mediator.boundary.db.CRUD.session_crud import SessionCRUD, session_crud, normalize_code
from mediator.boundary.db.CRUD.message_crud import MessageCRUD, message_crud
from mediator.boundary.db.CRUD.session_context_crud import (
    SessionContextCRUD,
    session_context_crud,
)

__all__ = [
    "BaseCRUD",
    "SessionCRUD",
    "session_crud",
    "normalize_code",
    "MessageCRUD",
    "message_crud",
    "SessionContextCRUD",
    "session_context_crud",
]
