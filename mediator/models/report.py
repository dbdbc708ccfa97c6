"""
Hand-off and report schemas.

Dependencies: pydantic
System role: Bridge summary and mediation report API contracts
"""

from enum import Enum

from pydantic import BaseModel, Field

from mediator.core.gateway.schema import MediationReport
from mediator.core.roles import PartnerRole


class ReportStatus(str, Enum):
    """Outcome of a get-or-create report request."""

    READY = "ready"
    WAITING_FOR_PARTNER = "waiting_for_partner"
    GENERATED = "generated"
    FAILED = "failed"


class ReportState(BaseModel):
    """Report coordinator result; `report` is set for READY and GENERATED only."""

    status: ReportStatus
    report: MediationReport | None = None

    @classmethod
    def ready(cls, report: MediationReport) -> "ReportState":
        return cls(status=ReportStatus.READY, report=report)

    @classmethod
    def generated(cls, report: MediationReport) -> "ReportState":
        return cls(status=ReportStatus.GENERATED, report=report)

    @classmethod
    def waiting(cls) -> "ReportState":
        return cls(status=ReportStatus.WAITING_FOR_PARTNER)

    @classmethod
    def failed(cls) -> "ReportState":
        return cls(status=ReportStatus.FAILED)


class PartnerReportResponse(BaseModel):
    """What one partner sees: the shared analysis and only their own advice."""

    status: ReportStatus
    role: PartnerRole
    analysis: str | None = None
    advice: str | None = None

    @classmethod
    def for_role(cls, state: ReportState, role: PartnerRole) -> "PartnerReportResponse":
        if state.report is None:
            return cls(status=state.status, role=role)
        advice = (
            state.report.advice_for_a
            if role is PartnerRole.PARTNER_A
            else state.report.advice_for_b
        )
        return cls(
            status=state.status,
            role=role,
            analysis=state.report.analysis,
            advice=advice,
        )


class BridgeSummaryResponse(BaseModel):
    """Invite details for Partner A."""

    session_code: str
    summary: str
    invite_text: str
    generated: bool = Field(description="False when the neutral fallback topic is shown")
