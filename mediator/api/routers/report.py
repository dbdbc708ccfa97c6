"""
Report API endpoints.

Routes:
- POST /sessions/{session_id}/report/{role} - Get or create the joint report

Dependencies: mediator.application.services.report_service
System role: Report Coordinator HTTP API
"""

import logging

from fastapi import APIRouter, Depends

from mediator.api.deps import get_partner_session, get_report_service
from mediator.api.routers.router_utils import handle_mediation_errors
from mediator.application.services.report_service import ReportService
from mediator.boundary.db.models.session_model import SessionModel
from mediator.core.roles import PartnerRole
from mediator.models.report import PartnerReportResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions/{session_id}/report", tags=["report"])


@router.post("/{role}", response_model=PartnerReportResponse)
@handle_mediation_errors
async def get_report(
    role: PartnerRole,
    session: SessionModel = Depends(get_partner_session),
    report_service: ReportService = Depends(get_report_service),
) -> PartnerReportResponse:
    """
    Get the joint report as seen by one partner.

    Status waiting_for_partner and failed carry no report; clients poll or retry.
    """
    state = await report_service.get_or_create_report(session)
    return PartnerReportResponse.for_role(state, role)
