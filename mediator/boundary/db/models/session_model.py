"""
Session ORM model.

Represents one mediation between two partners: their credentials, the
write-once bridge summary, and the write-once joint report.

Dependencies: sqlalchemy, mediator.boundary.db.base
System role: Shared session state
"""

from sqlalchemy import JSON, Boolean, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from mediator.boundary.db.base import Base, UUIDMixin, TimestampMixin
from mediator.core.roles import PartnerRole, SessionStatus


class SessionModel(Base, UUIDMixin, TimestampMixin):
    """
    Session ORM model binding two private threads together.

    Attributes:
        id: UUID primary key (auto-generated)
        session_code: Short human-facing code, unique, stored upper-case
        partner_a_name, partner_a_email, partner_a_pin: Initiator details
        partner_b_name, partner_b_email, partner_b_pin: Set together on join
        partner_b_ready: True once Partner B has registered
        status: waiting -> active -> resolved
        bridge_summary: Neutral topic of Partner A's thread (write-once)
        mediation_report: Joint report dict (write-once)

    Relationships:
        messages: One-to-many with MessageModel (cascade delete on session removal)
        contexts: One-to-many with SessionContextModel (cascade delete)
    """

    __tablename__ = "sessions"

    session_code: Mapped[str] = mapped_column(
        String(16),
        unique=True,
        index=True,
        nullable=False,
    )

    partner_a_name: Mapped[str] = mapped_column(String(255), nullable=False)
    partner_a_email: Mapped[str] = mapped_column(String(255), nullable=False)
    partner_a_pin: Mapped[str] = mapped_column(String(4), nullable=False)

    partner_b_name: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    partner_b_email: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    partner_b_pin: Mapped[str | None] = mapped_column(String(4), nullable=True, default=None)
    partner_b_ready: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    status: Mapped[SessionStatus] = mapped_column(
        Enum(SessionStatus, name="session_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=SessionStatus.WAITING,
    )

    bridge_summary: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    mediation_report: Mapped[dict | None] = mapped_column(JSON(none_as_null=True), nullable=True)

    # Relationships
    messages = relationship(
        "MessageModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    contexts = relationship(
        "SessionContextModel",
        back_populates="session",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def pin_for(self, role: PartnerRole) -> str | None:
        """PIN registered for the given role, None if Partner B has not joined."""
        if role is PartnerRole.PARTNER_A:
            return self.partner_a_pin
        return self.partner_b_pin if self.partner_b_ready else None

    def name_for(self, role: PartnerRole) -> str | None:
        """Display name registered for the given role."""
        if role is PartnerRole.PARTNER_A:
            return self.partner_a_name
        return self.partner_b_name
