"""
Message CRUD operations.

Append and role-filtered, time-ordered reads over the messages table.

Dependencies: sqlalchemy, mediator.boundary.db.models
System role: Thread persistence operations
"""

from collections.abc import Iterable
from typing import Sequence
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from mediator.boundary.db.models.message_model import MessageModel
from mediator.boundary.db.CRUD.base_crud import BaseCRUD
from mediator.core.roles import MessageRole


class MessageCRUD(BaseCRUD[MessageModel]):
    """CRUD operations for MessageModel. Rows are never updated or deleted."""

    def __init__(self) -> None:
        """Initialize MessageCRUD with MessageModel."""
        super().__init__(MessageModel)

    async def append(
        self,
        session: AsyncSession,
        session_id: UUID,
        role: MessageRole,
        content: str,
    ) -> MessageModel:
        """
        Append a message to a session.

        Args:
            session: Async database session
            session_id: Owning session UUID
            role: Message tag
            content: Message text

        Returns:
            Created MessageModel with id and created_at
        """
        return await self.create(session, session_id=session_id, role=role, content=content)

    async def get_by_roles(
        self,
        session: AsyncSession,
        session_id: UUID,
        roles: Iterable[MessageRole],
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[MessageModel]:
        """
        Read messages with the given tags, oldest first.

        Args:
            session: Async database session
            session_id: Session UUID
            roles: Tags to include
            limit: Maximum number of messages (None for all)
            offset: Number of messages to skip from the start

        Returns:
            Messages ordered by created_at ascending
        """
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id, MessageModel.role.in_(list(roles)))
            .order_by(MessageModel.created_at.asc())
            .offset(offset)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_latest_by_roles(
        self,
        session: AsyncSession,
        session_id: UUID,
        roles: Iterable[MessageRole],
        limit: int,
    ) -> list[MessageModel]:
        """
        Read the most recent messages with the given tags, returned oldest first.

        Args:
            session: Async database session
            session_id: Session UUID
            roles: Tags to include
            limit: Window size

        Returns:
            Up to `limit` messages ordered by created_at ascending
        """
        if limit <= 0:
            return []
        stmt = (
            select(MessageModel)
            .where(MessageModel.session_id == session_id, MessageModel.role.in_(list(roles)))
            .order_by(MessageModel.created_at.desc())
            .limit(limit)
        )
        result = await session.execute(stmt)
        return list(reversed(result.scalars().all()))

    async def count_by_roles(
        self,
        session: AsyncSession,
        session_id: UUID,
        roles: Iterable[MessageRole],
    ) -> int:
        """Count messages with the given tags in a session."""
        stmt = (
            select(func.count())
            .select_from(MessageModel)
            .where(MessageModel.session_id == session_id, MessageModel.role.in_(list(roles)))
        )
        result = await session.execute(stmt)
        return result.scalar_one()


message_crud = MessageCRUD()
