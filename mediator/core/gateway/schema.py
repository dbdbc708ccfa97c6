"""
Gateway input and output schemas.

Dependencies: pydantic
System role: Contract between services and the text-generation gateway
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HistoryTurn(BaseModel):
    """One prior turn in the generic user/model alternation."""

    role: Literal["user", "model"]
    content: str


class MediationReport(BaseModel):
    """Structured joint report produced once per session."""

    model_config = ConfigDict(extra="ignore")

    analysis: str = Field(min_length=1, description="Shared, neutral analysis validating both sides")
    advice_for_a: str = Field(min_length=1, description="Advice addressed to Partner A")
    advice_for_b: str = Field(min_length=1, description="Advice addressed to Partner B")
