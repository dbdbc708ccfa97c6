"""
Session CRUD operations.

Provides lookups by id and code plus the conditional writes that guard the
session's write-once fields.

Dependencies: sqlalchemy, mediator.boundary.db.models
System role: Session persistence operations
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mediator.boundary.db.base import utcnow
from mediator.boundary.db.models.session_model import SessionModel
from mediator.boundary.db.CRUD.base_crud import BaseCRUD
from mediator.core.roles import SessionStatus


def normalize_code(code: str) -> str:
    """Session codes compare trimmed and case-insensitively."""
    return code.strip().upper()


class SessionCRUD(BaseCRUD[SessionModel]):
    """
    CRUD operations for SessionModel.

    Every mutation of partner_b_*, bridge_summary and mediation_report goes
    through a conditional update so concurrent first writers cannot both win.
    """

    def __init__(self) -> None:
        """Initialize SessionCRUD with SessionModel."""
        super().__init__(SessionModel)

    async def get_by_code(
        self,
        session: AsyncSession,
        code: str,
    ) -> SessionModel | None:
        """
        Retrieve session by its human-facing code.

        Args:
            session: Async database session
            code: Session code, any case, surrounding whitespace ignored

        Returns:
            SessionModel if found, None otherwise
        """
        stmt = (
            select(SessionModel)
            .where(SessionModel.session_code == normalize_code(code))
            .execution_options(populate_existing=True)
        )
        result = await session.execute(stmt)
        return result.scalar_one_or_none()

    async def code_exists(self, session: AsyncSession, code: str) -> bool:
        """Check whether a session code is already taken."""
        stmt = select(SessionModel.id).where(SessionModel.session_code == normalize_code(code))
        result = await session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def register_partner_b(
        self,
        session: AsyncSession,
        id: UUID,
        name: str,
        email: str,
        pin: str,
    ) -> bool:
        """
        Register Partner B if nobody has yet.

        Sets all partner_b fields, partner_b_ready and the active status in
        one statement.

        Returns:
            True if this call registered Partner B
        """
        return await self.update_where(
            session,
            id,
            SessionModel.partner_b_ready.is_(False),
            partner_b_name=name,
            partner_b_email=email,
            partner_b_pin=pin,
            partner_b_ready=True,
            status=SessionStatus.ACTIVE,
            updated_at=utcnow(),
        )

    async def set_bridge_summary(
        self,
        session: AsyncSession,
        id: UUID,
        summary: str,
    ) -> bool:
        """
        Store the bridge summary only if none is stored yet.

        Returns:
            True if this call stored the summary
        """
        return await self.update_where(
            session,
            id,
            SessionModel.bridge_summary.is_(None),
            bridge_summary=summary,
            updated_at=utcnow(),
        )

    async def set_mediation_report(
        self,
        session: AsyncSession,
        id: UUID,
        report: dict,
        resolved_at: datetime | None = None,
    ) -> bool:
        """
        Store the joint report only if none is stored yet, marking the session resolved.

        Returns:
            True if this call stored the report
        """
        return await self.update_where(
            session,
            id,
            SessionModel.mediation_report.is_(None),
            mediation_report=report,
            status=SessionStatus.RESOLVED,
            updated_at=resolved_at or utcnow(),
        )


session_crud = SessionCRUD()
