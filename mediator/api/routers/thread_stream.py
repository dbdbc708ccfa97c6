"""
WebSocket live thread feed.

Pushes a partner's thread to the client as it grows. New rows arrive from
the insert feed and from a periodic re-poll; both pass through the same
ThreadSync so each message id is sent once.

Routes: WS /ws/sessions/{session_id}/threads/{role}?pin=....

Dependencies: mediator.application.services, mediator.boundary.feed
System role: Live update delivery
"""

import asyncio
import logging
from uuid import UUID

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from mediator.application.services import SessionService, ThreadSync
from mediator.boundary.db import get_async_session_factory
from mediator.boundary.db.CRUD.message_crud import message_crud
from mediator.boundary.feed import get_message_feed
from mediator.configs import get_settings
from mediator.core.exceptions import MediatorException
from mediator.core.roles import PartnerRole
from mediator.models.chat import MessageRecord
from mediator.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)
router = APIRouter(tags=["streaming"])

MESSAGE_EVENT = "message"
CONNECTED_EVENT = "connected"


async def _poll_thread(session_id: UUID, role: PartnerRole) -> list[MessageRecord]:
    async with get_async_session_factory()() as db:
        rows = await message_crud.get_by_roles(db, session_id, role.thread.tags)
        return [MessageRecord.model_validate(r) for r in rows]


async def _send_messages(websocket: WebSocket, messages: list[MessageRecord]) -> None:
    for message in messages:
        await websocket.send_json({"event": MESSAGE_EVENT, "data": message.model_dump(mode="json")})


async def _wait_for_disconnect(websocket: WebSocket) -> None:
    """Drain client frames until the client goes away; client messages are ignored."""
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        return


@router.websocket("/ws/sessions/{session_id}/threads/{role}")
async def websocket_thread(
    websocket: WebSocket,
    session_id: UUID,
    role: PartnerRole,
    pin: str | None = None,
) -> None:
    """
    Stream one partner's thread.

    Server sends:
        {"event": "connected", "data": {"session_id": "...", "role": "..."}}
        {"event": "message", "data": {"id": "...", "role": "...", "content": "...", ...}}

    The connection is closed with a policy-violation code if the PIN does
    not match the role.
    """
    async with get_async_session_factory()() as db:
        try:
            await SessionService(db).authorize_role(session_id, role, pin)
        except MediatorException as e:
            logger.info("WebSocket rejected", extra={"session_id": str(session_id), "reason": type(e).__name__})
            await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
            return

    await websocket.accept()
    await websocket.send_json({
        "event": CONNECTED_EVENT,
        "data": {"session_id": str(session_id), "role": role.value},
    })

    poll_interval = get_settings().mediation.poll_interval_seconds
    sync = ThreadSync(role)

    # Subscribe before the first poll so nothing inserted in between is missed
    with get_message_feed().subscribe(session_id) as subscription:
        disconnected = asyncio.create_task(_wait_for_disconnect(websocket))
        try:
            await _send_messages(websocket, sync.accept(await _poll_thread(session_id, role)))

            while not disconnected.done():
                event = await subscription.get(timeout=poll_interval)
                if event is not None:
                    batch = [event]
                else:
                    batch = await _poll_thread(session_id, role)
                await _send_messages(websocket, sync.accept(batch))

        except WebSocketDisconnect:
            pass
        finally:
            disconnected.cancel()

    log_with_context(
        logger,
        logging.INFO,
        "WebSocket closed",
        session_id=session_id,
        role=role.value,
        delivered=sync.delivered,
    )
