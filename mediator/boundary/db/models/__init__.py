"""
Database models package.

Exports:
  - SessionModel: Shared mediation session
  - MessageModel: Append-only thread message
  - SessionContextModel: Per-role context record

Dependencies: sqlalchemy, mediator.boundary.db.base
System role: Database model definitions for domain entities
"""

from mediator.boundary.db.models.session_model import SessionModel
from mediator.boundary.db.models.message_model import MessageModel
from mediator.boundary.db.models.session_context_model import SessionContextModel

__all__ = [
    "SessionModel",
    "MessageModel",
    "SessionContextModel",
]
