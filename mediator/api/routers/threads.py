"""
Thread API endpoints.

Routes (all require the X-Partner-Pin header for {role}):
- GET  /sessions/{session_id}/threads/{role}/messages - Read own thread
- POST /sessions/{session_id}/threads/{role}/messages - Send a message
- POST /sessions/{session_id}/threads/{role}/welcome - Greet an empty thread
- GET  /sessions/{session_id}/threads/{role}/proceed - Proceed eligibility

Dependencies: mediator.application.services.chat_service, mediator.models
System role: Conversation Channel HTTP API
"""

import logging

from fastapi import APIRouter, Depends, Query

from mediator.api.deps import get_chat_service, get_partner_session
from mediator.api.routers.router_utils import handle_mediation_errors
from mediator.application.services.chat_service import ChatService
from mediator.boundary.db.models.session_model import SessionModel
from mediator.core.roles import PartnerRole
from mediator.models.chat import (
    MessageRecord,
    ProceedResponse,
    SendMessageRequest,
    SendMessageResponse,
    ThreadResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions/{session_id}/threads/{role}", tags=["threads"])


@router.get("/messages", response_model=ThreadResponse)
@handle_mediation_errors
async def get_thread(
    role: PartnerRole,
    limit: int | None = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    session: SessionModel = Depends(get_partner_session),
    chat_service: ChatService = Depends(get_chat_service),
) -> ThreadResponse:
    """Read the caller's own thread, oldest first."""
    messages = await chat_service.get_thread(session, role, limit=limit, offset=offset)
    records = [MessageRecord.model_validate(m) for m in messages]
    return ThreadResponse(messages=records, total=len(records))


@router.post("/welcome", response_model=ThreadResponse)
@handle_mediation_errors
async def ensure_welcome(
    role: PartnerRole,
    session: SessionModel = Depends(get_partner_session),
    chat_service: ChatService = Depends(get_chat_service),
) -> ThreadResponse:
    """Send the greeting if the thread is empty and return the thread."""
    await chat_service.ensure_welcome(session, role)
    messages = await chat_service.get_thread(session, role)
    records = [MessageRecord.model_validate(m) for m in messages]
    return ThreadResponse(messages=records, total=len(records))


@router.post("/messages", response_model=SendMessageResponse)
@handle_mediation_errors
async def send_message(
    role: PartnerRole,
    request: SendMessageRequest,
    session: SessionModel = Depends(get_partner_session),
    chat_service: ChatService = Depends(get_chat_service),
) -> SendMessageResponse:
    """
    Send a message and get the mediator's reply.

    A reply of null with ai_available=false means the message was stored
    but the mediator could not answer right now.

    Raises:
        HTTPException(400): Empty message
    """
    return await chat_service.send_message(session, role, request.text)


@router.get("/proceed", response_model=ProceedResponse)
@handle_mediation_errors
async def get_proceed(
    role: PartnerRole,
    session: SessionModel = Depends(get_partner_session),
    chat_service: ChatService = Depends(get_chat_service),
) -> ProceedResponse:
    """Whether the partner may leave the chat (invite for A, report for B)."""
    count = await chat_service.human_message_count(session, role)
    required = chat_service.settings.min_messages_to_proceed
    return ProceedResponse(
        can_proceed=count >= required,
        human_message_count=count,
        required=required,
    )
