"""
Session context ORM model.

One record per (session, partner role), created empty alongside the
session.

Dependencies: sqlalchemy, mediator.boundary.db.base
System role: Per-role context persistence
"""

from uuid import UUID

from sqlalchemy import JSON, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mediator.boundary.db.base import Base, UUIDMixin, TimestampMixin
from mediator.core.roles import PartnerRole


class SessionContextModel(Base, UUIDMixin, TimestampMixin):
    """
    Per-role context record.

    Attributes:
        session_id: Owning session
        partner_role: partner_a or partner_b
        conversation_history: JSON list, empty on creation
    """

    __tablename__ = "session_context"
    __table_args__ = (
        UniqueConstraint("session_id", "partner_role", name="uq_session_context_role"),
    )

    session_id: Mapped[UUID] = mapped_column(
        ForeignKey("sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    partner_role: Mapped[PartnerRole] = mapped_column(
        Enum(PartnerRole, name="partner_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    conversation_history: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

    session = relationship("SessionModel", back_populates="contexts")
