"""
Session context CRUD operations.

Dependencies: sqlalchemy, mediator.boundary.db.models
System role: Per-role context persistence operations
"""

from typing import Sequence
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from mediator.boundary.db.models.session_context_model import SessionContextModel
from mediator.boundary.db.CRUD.base_crud import BaseCRUD
from mediator.core.roles import PartnerRole


class SessionContextCRUD(BaseCRUD[SessionContextModel]):
    """CRUD operations for SessionContextModel."""

    def __init__(self) -> None:
        super().__init__(SessionContextModel)

    async def create_for_roles(
        self,
        session: AsyncSession,
        session_id: UUID,
    ) -> list[SessionContextModel]:
        """Create one empty context record per partner role."""
        contexts = [
            SessionContextModel(session_id=session_id, partner_role=role, conversation_history=[])
            for role in PartnerRole
        ]
        session.add_all(contexts)
        await session.flush()
        return contexts

    async def get_for_session(
        self,
        session: AsyncSession,
        session_id: UUID,
    ) -> Sequence[SessionContextModel]:
        stmt = select(SessionContextModel).where(SessionContextModel.session_id == session_id)
        result = await session.execute(stmt)
        return result.scalars().all()


session_context_crud = SessionContextCRUD()
