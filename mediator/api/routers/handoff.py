"""
Hand-off API endpoints.

Routes:
- POST /sessions/{session_id}/bridge-summary - Invite details for Partner A

Dependencies: mediator.application.services.handoff_service
System role: Hand-off Coordinator HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from mediator.api.deps import get_handoff_service, get_partner_a_session, get_settings_dependency
from mediator.api.routers.router_utils import handle_mediation_errors
from mediator.application.services.handoff_service import HandoffService, build_invite_text
from mediator.boundary.db.models.session_model import SessionModel
from mediator.configs import Settings
from mediator.core.exceptions import GatewayError
from mediator.models.report import BridgeSummaryResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions/{session_id}", tags=["handoff"])


@router.post("/bridge-summary", response_model=BridgeSummaryResponse)
@handle_mediation_errors
async def get_bridge_summary(
    session: SessionModel = Depends(get_partner_a_session),
    handoff_service: HandoffService = Depends(get_handoff_service),
    settings: Settings = Depends(get_settings_dependency),
) -> BridgeSummaryResponse:
    """
    Get or create the neutral topic summary and the invite text.

    If the summary cannot be generated, a neutral fallback topic is returned
    and nothing is stored, so a later call can try again.
    """
    generated = True
    try:
        summary = await handoff_service.get_or_create_bridge_summary(session)
    except GatewayError:
        logger.warning("Bridge summary unavailable, using fallback", extra={"session_id": str(session.id)})
        summary = settings.mediation.fallback_topic
        generated = False

    return BridgeSummaryResponse(
        session_code=session.session_code,
        summary=summary,
        invite_text=build_invite_text(summary, session.session_code),
        generated=generated,
    )
