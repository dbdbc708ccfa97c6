"""
Report service.

Generates the joint mediation report once both partners have taken part,
and serves the stored report to every later caller so both partners always
read the same text.

Dependencies: mediator.core.gateway, mediator.boundary.db
System role: Report Coordinator
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from mediator.application.services.persistence import guard_persistence
from mediator.boundary.db.CRUD.message_crud import message_crud
from mediator.boundary.db.CRUD.session_crud import session_crud
from mediator.boundary.db.models.session_model import SessionModel
from mediator.configs.mediation import MediationSettings
from mediator.core.exceptions import SessionNotFoundError
from mediator.core.gateway.gateway import MediatorGateway
from mediator.core.gateway.schema import MediationReport
from mediator.core.roles import MessageRole
from mediator.models.report import ReportState

logger = logging.getLogger(__name__)


class ReportService:
    """Joint report get-or-create."""

    def __init__(
        self,
        db: AsyncSession,
        gateway: MediatorGateway,
        settings: MediationSettings | None = None,
    ) -> None:
        self.db = db
        self.gateway = gateway
        self.settings = settings or MediationSettings()

    @guard_persistence("mediation_report")
    async def get_or_create_report(self, session: SessionModel) -> ReportState:
        """
        Get the stored report or try to generate it.

        Flow:
        1. Stored report -> READY (no generation)
        2. Either partner below the message threshold -> WAITING_FOR_PARTNER
        3. Gateway returns a report -> compare-and-set store -> GENERATED
           (READY with the stored report if another caller stored first)
        4. Gateway fails or output unparsable -> FAILED, nothing stored

        Raises:
            SessionNotFoundError: Session no longer exists
        """
        current = await session_crud.get_by_id(self.db, session.id, fresh=True)
        if current is None:
            raise SessionNotFoundError(str(session.id))
        if current.mediation_report is not None:
            return ReportState.ready(MediationReport.model_validate(current.mediation_report))

        messages_a = await message_crud.get_by_roles(self.db, current.id, [MessageRole.PARTNER_A])
        messages_b = await message_crud.get_by_roles(self.db, current.id, [MessageRole.PARTNER_B])
        threshold = self.settings.min_messages_for_report
        if len(messages_a) < threshold or len(messages_b) < threshold:
            logger.info(
                "Report waiting for partner",
                extra={
                    "session_id": str(current.id),
                    "count_a": len(messages_a),
                    "count_b": len(messages_b),
                },
            )
            return ReportState.waiting()

        report = await self.gateway.generate_report(messages_a, messages_b)
        if report is None:
            logger.warning("Report generation failed", extra={"session_id": str(current.id)})
            return ReportState.failed()

        stored = await session_crud.set_mediation_report(self.db, current.id, report.model_dump())
        await self.db.commit()
        if stored:
            logger.info("Mediation report stored", extra={"session_id": str(current.id)})
            return ReportState.generated(report)

        winner = await session_crud.get_by_id(self.db, current.id, fresh=True)
        return ReportState.ready(MediationReport.model_validate(winner.mediation_report))
