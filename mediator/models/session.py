"""
Session domain models and schemas.

Request/response schemas for session creation and role entry.

Dependencies: pydantic
System role: Session API contracts
"""

import uuid

from pydantic import BaseModel, Field

from mediator.core.roles import PartnerRole, SessionStatus


class CreateSessionRequest(BaseModel):
    """Request schema for initiating a new session as Partner A."""

    name: str = Field(description="Partner A display name")
    email: str = Field(description="Partner A email")
    pin: str = Field(description="4-digit PIN used to log back in")


class JoinSessionRequest(BaseModel):
    """Request schema for joining as Partner B or logging back in as either partner."""

    code: str = Field(description="Session code shared by Partner A")
    pin: str = Field(description="4-digit PIN")
    name: str | None = Field(default=None, description="Required only on Partner B's first join")
    email: str | None = Field(default=None, description="Required only on Partner B's first join")


class SessionEntryResponse(BaseModel):
    """Response schema for create and join: where the caller landed."""

    session_id: uuid.UUID
    session_code: str
    role: PartnerRole
    name: str
    status: SessionStatus
