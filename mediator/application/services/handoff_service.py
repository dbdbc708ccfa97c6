"""
Hand-off service.

Produces the neutral bridge summary of Partner A's topic that is shown on
the invite and in Partner B's greeting. The summary is write-once: the
first stored value is returned to every later caller.

Dependencies: mediator.core.gateway, mediator.boundary.db
System role: Hand-off Coordinator
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mediator.application.services.persistence import guard_persistence
from mediator.boundary.db.CRUD.message_crud import message_crud
from mediator.boundary.db.CRUD.session_crud import session_crud
from mediator.boundary.db.models.session_model import SessionModel
from mediator.core.exceptions import SessionNotFoundError, ValidationError
from mediator.core.gateway.gateway import MediatorGateway
from mediator.core.roles import MessageRole

logger = logging.getLogger(__name__)

INVITE_TEMPLATE = (
    'I\'ve started a mediation session regarding "{summary}". '
    "Please join me here using code: {code}"
)


def build_invite_text(summary: str, code: str) -> str:
    """Shareable invite message for Partner B."""
    return INVITE_TEMPLATE.format(summary=summary, code=code)


class HandoffService:
    """Bridge summary get-or-create."""

    def __init__(self, db: AsyncSession, gateway: MediatorGateway) -> None:
        self.db = db
        self.gateway = gateway

    @guard_persistence("bridge_summary")
    async def get_or_create_bridge_summary(self, session: SessionModel) -> str:
        """
        Return the stored bridge summary, generating and storing it first if needed.

        Only Partner A's own messages are sent to the gateway. The write is a
        compare-and-set on "summary is null"; a caller that loses the race
        returns the winner's summary.

        Raises:
            SessionNotFoundError: Session no longer exists
            ValidationError: Partner A has not written anything yet
            GatewayError: Summary generation failed (nothing stored)
        """
        current = await session_crud.get_by_id(self.db, session.id, fresh=True)
        if current is None:
            raise SessionNotFoundError(str(session.id))
        if current.bridge_summary:
            return current.bridge_summary

        messages = await message_crud.get_by_roles(self.db, current.id, [MessageRole.PARTNER_A])
        if not messages:
            raise ValidationError("Partner A has not shared anything to summarize yet")

        summary = await self.gateway.generate_summary(messages)

        stored = await session_crud.set_bridge_summary(self.db, current.id, summary)
        await self.db.commit()
        if stored:
            logger.info("Bridge summary stored", extra={"session_id": str(current.id)})
            return summary

        winner = await session_crud.get_by_id(self.db, current.id, fresh=True)
        logger.info("Bridge summary already stored by another caller", extra={"session_id": str(current.id)})
        return winner.bridge_summary
