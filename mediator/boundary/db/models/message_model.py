"""
Message ORM model.

Append-only rows; the role tag decides which partner's thread a row
belongs to.

Dependencies: sqlalchemy, mediator.boundary.db.base
System role: Thread message persistence
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Enum, ForeignKey, Index, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mediator.boundary.db.base import Base, UUIDMixin, utcnow
from mediator.core.roles import MessageRole


class MessageModel(Base, UUIDMixin):
    """
    Message ORM model.

    Attributes:
        id: UUID primary key (auto-generated)
        session_id: Owning session
        role: One of partner_a, partner_b, bot_to_a, bot_to_b
        content: Message text
        created_at: Creation timestamp, the thread ordering key
    """

    __tablename__ = "messages"
    __table_args__ = (
        Index("ix_messages_session_role_created", "session_id", "role", "created_at"),
    )

    session_id: Mapped[UUID] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    role: Mapped[MessageRole] = mapped_column(
        Enum(MessageRole, name="message_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    session = relationship("SessionModel", back_populates="messages")
