"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, UUIDMixin, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(), get_async_db(): Connection management
  - SessionModel, MessageModel, SessionContextModel: Domain entities
  - session_crud, message_crud, session_context_crud: CRUD operation singletons

Dependencies: sqlalchemy, mediator.configs
System role: Durable storage for sessions and their append-only messages
"""

from mediator.boundary.db.base import Base, TimestampMixin, UUIDMixin
from mediator.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
)
from mediator.boundary.db.models import MessageModel, SessionContextModel, SessionModel
from mediator.boundary.db.CRUD import (
    BaseCRUD,
    MessageCRUD,
    SessionContextCRUD,
    SessionCRUD,
    message_crud,
    session_context_crud,
    session_crud,
)

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    "UUIDMixin",
    # Connection
    "get_async_db",
    "get_async_engine",
    "get_async_session_factory",
    # Models
    "SessionModel",
    "MessageModel",
    "SessionContextModel",
    # CRUD classes
    "BaseCRUD",
    "SessionCRUD",
    "MessageCRUD",
    "SessionContextCRUD",
    # CRUD singletons
    "session_crud",
    "message_crud",
    "session_context_crud",
]
