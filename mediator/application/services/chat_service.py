"""
Chat service for private partner threads.

Each partner talks to the mediator in an isolated thread made of their own
messages and the bot replies addressed to them. The service appends human
and AI turns, sends the greeting, and reports when a partner has shared
enough to move on.

Dependencies: mediator.core.gateway, mediator.boundary.db, mediator.boundary.feed
System role: Conversation Channel
"""

import asyncio
import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from mediator.application.services.persistence import guard_persistence
from mediator.boundary.db.CRUD.message_crud import message_crud
from mediator.boundary.db.CRUD.session_crud import session_crud
from mediator.boundary.db.models.message_model import MessageModel
from mediator.boundary.db.models.session_model import SessionModel
from mediator.boundary.feed.message_feed import MessageFeed, get_message_feed
from mediator.configs.mediation import MediationSettings
from mediator.core.exceptions import GatewayError, SessionNotFoundError, ValidationError
from mediator.core.gateway.gateway import MediatorGateway
from mediator.core.gateway.schema import HistoryTurn
from mediator.core.roles import PartnerRole
from mediator.models.chat import MessageRecord, SendMessageResponse

logger = logging.getLogger(__name__)

GENERIC_GREETING = "Hi {name}. I'm here to listen. What's on your mind?"
BRIDGED_GREETING = (
    'Hi {name}. Partner A started a session regarding: "{summary}".\n\n'
    "How do you feel about this?"
)


def build_greeting(session: SessionModel, role: PartnerRole) -> str:
    """Greeting for an empty thread; Partner B's mentions the bridge summary when known."""
    name = session.name_for(role) or "there"
    if role is PartnerRole.PARTNER_B and session.bridge_summary:
        return BRIDGED_GREETING.format(name=name, summary=session.bridge_summary)
    return GENERIC_GREETING.format(name=name)


def to_history(messages: Sequence[MessageModel], role: PartnerRole) -> list[HistoryTurn]:
    """Map thread rows onto the generic user/model alternation."""
    return [
        HistoryTurn(role="user" if m.role == role.human_tag else "model", content=m.content)
        for m in messages
    ]


class ChatService:
    """
    Chat service for one partner's thread at a time.

    Human messages are committed before the AI is called, so a gateway
    failure never loses what the partner wrote.
    """

    def __init__(
        self,
        db: AsyncSession,
        gateway: MediatorGateway,
        feed: MessageFeed | None = None,
        settings: MediationSettings | None = None,
        session_factory: async_sessionmaker | None = None,
    ) -> None:
        """
        Initialize chat service.

        Args:
            db: AsyncSession for database operations
            gateway: Text-generation gateway
            feed: Change feed notified after each committed insert
            settings: Mediation settings (context window, proceed threshold)
            session_factory: Factory for an independent session used to store
                AI replies, so a reply still lands if the caller goes away.
                Falls back to `db` when None.
        """
        self.db = db
        self.gateway = gateway
        self.feed = feed or get_message_feed()
        self.settings = settings or MediationSettings()
        self.session_factory = session_factory

    def _publish(self, message: MessageModel) -> MessageRecord:
        record = MessageRecord.model_validate(message)
        self.feed.publish(record)
        return record

    @guard_persistence("get_thread")
    async def get_thread(
        self,
        session: SessionModel,
        role: PartnerRole,
        limit: int | None = None,
        offset: int = 0,
    ) -> Sequence[MessageModel]:
        """
        Read one partner's thread, oldest first.

        Only rows tagged with the role's human or bot tag are returned.
        """
        return await message_crud.get_by_roles(
            self.db, session.id, role.thread.tags, limit=limit, offset=offset
        )

    @guard_persistence("ensure_welcome")
    async def ensure_welcome(self, session: SessionModel, role: PartnerRole) -> MessageRecord | None:
        """
        Append the bot greeting if the thread is still empty.

        Returns:
            The greeting, or None if the thread already had messages
        """
        # Idempotent for sequential calls. Two concurrent first calls on an
        # empty thread can both append a greeting.
        count = await message_crud.count_by_roles(self.db, session.id, role.thread.tags)
        if count:
            return None

        # Pick up a bridge summary written after the caller loaded the session
        current = await session_crud.get_by_id(self.db, session.id, fresh=True)
        if current is None:
            raise SessionNotFoundError(str(session.id))

        greeting = await message_crud.append(
            self.db, current.id, role.bot_tag, build_greeting(current, role)
        )
        await self.db.commit()
        logger.info(
            "Greeting sent",
            extra={"session_id": str(current.id), "role": role.value},
        )
        return self._publish(greeting)

    @guard_persistence("send_message")
    async def send_message(
        self,
        session: SessionModel,
        role: PartnerRole,
        text: str,
    ) -> SendMessageResponse:
        """
        Store a partner's message and the mediator's reply.

        Flow:
        1. Reject empty text before touching the store
        2. Read the recent context window
        3. Store and commit the human message
        4. Ask the gateway for a reply and store it under the role's bot tag

        Args:
            session: Session the thread belongs to
            role: Sending partner
            text: Message text

        Returns:
            SendMessageResponse: Stored message and reply (reply None if the AI was unavailable)

        Raises:
            ValidationError: Empty or whitespace-only text
        """
        text = (text or "").strip()
        if not text:
            raise ValidationError("Message text is required", field="text")

        window = await message_crud.get_latest_by_roles(
            self.db, session.id, role.thread.tags, limit=self.settings.context_window
        )
        history = to_history(window, role)

        message = await message_crud.append(self.db, session.id, role.human_tag, text)
        await self.db.commit()
        record = self._publish(message)
        logger.info(
            "Partner message stored",
            extra={"session_id": str(session.id), "role": role.value, "history_turns": len(history)},
        )

        # Shielded so the reply is still generated and stored if the caller is cancelled
        reply = await asyncio.shield(self._reply(session, role, history, text))
        return SendMessageResponse(message=record, reply=reply, ai_available=reply is not None)

    async def _reply(
        self,
        session: SessionModel,
        role: PartnerRole,
        history: list[HistoryTurn],
        text: str,
    ) -> MessageRecord | None:
        try:
            reply_text = await self.gateway.generate_reply(history, text)
        except GatewayError as e:
            logger.warning(
                "AI reply unavailable, partner message kept",
                extra={"session_id": str(session.id), "role": role.value, "error_msg": e.message},
            )
            return None

        if self.session_factory is None:
            reply = await message_crud.append(self.db, session.id, role.bot_tag, reply_text)
            await self.db.commit()
        else:
            async with self.session_factory() as db:
                reply = await message_crud.append(db, session.id, role.bot_tag, reply_text)
                await db.commit()
        return self._publish(reply)

    @guard_persistence("human_message_count")
    async def human_message_count(self, session: SessionModel, role: PartnerRole) -> int:
        """Number of messages the partner has written."""
        return await message_crud.count_by_roles(self.db, session.id, [role.human_tag])

    async def can_proceed(self, session: SessionModel, role: PartnerRole) -> bool:
        """True once the partner has written at least the configured number of messages."""
        count = await self.human_message_count(session, role)
        return count >= self.settings.min_messages_to_proceed
