"""
Session API endpoints.

Routes:
- POST /sessions - Initiate a session as Partner A
- POST /sessions/join - Join as Partner B or log back in as either partner

Dependencies: mediator.application.services.session_service, mediator.models
System role: Role-entry HTTP API
"""

import logging

from fastapi import APIRouter, Depends, status

from mediator.api.deps import get_session_service
from mediator.api.routers.router_utils import handle_mediation_errors
from mediator.application.services.session_service import SessionService
from mediator.core.roles import PartnerRole
from mediator.models.session import (
    CreateSessionRequest,
    JoinSessionRequest,
    SessionEntryResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionEntryResponse, status_code=status.HTTP_201_CREATED)
@handle_mediation_errors
async def create_session(
    request: CreateSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> SessionEntryResponse:
    """
    Create a new session with the caller as Partner A.

    Raises:
        HTTPException(400): Missing name/email or malformed PIN
        HTTPException(503): Store unavailable
    """
    session = await session_service.create_session(
        name=request.name,
        email=request.email,
        pin=request.pin,
    )
    return SessionEntryResponse(
        session_id=session.id,
        session_code=session.session_code,
        role=PartnerRole.PARTNER_A,
        name=session.partner_a_name,
        status=session.status,
    )


@router.post("/join", response_model=SessionEntryResponse)
@handle_mediation_errors
async def join_session(
    request: JoinSessionRequest,
    session_service: SessionService = Depends(get_session_service),
) -> SessionEntryResponse:
    """
    Enter a session by code and PIN.

    Raises:
        HTTPException(400): Missing code, malformed PIN, or missing first-join details
        HTTPException(404): Unknown session code
        HTTPException(403): Incorrect PIN
    """
    session, role = await session_service.join_or_login(
        code=request.code,
        pin=request.pin,
        name=request.name,
        email=request.email,
    )
    return SessionEntryResponse(
        session_id=session.id,
        session_code=session.session_code,
        role=role,
        name=session.name_for(role),
        status=session.status,
    )
