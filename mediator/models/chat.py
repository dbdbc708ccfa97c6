"""
Chat domain models and schemas.

Request/response schemas for thread operations and live feed events.

Dependencies: pydantic
System role: Chat API contracts
"""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from mediator.core.roles import MessageRole


class MessageRecord(BaseModel):
    """A stored message as seen by clients and the change feed."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    session_id: uuid.UUID
    role: MessageRole
    content: str
    created_at: datetime


class SendMessageRequest(BaseModel):
    """Request schema for sending a message in one's own thread."""

    text: str = Field(description="Message text")


class SendMessageResponse(BaseModel):
    """
    Result of a send.

    The human message is always stored. `reply` is None when the AI was
    unavailable; the client may retry by sending again later.
    """

    message: MessageRecord
    reply: MessageRecord | None = None
    ai_available: bool = True


class ThreadResponse(BaseModel):
    """Response schema for a partner's thread."""

    messages: list[MessageRecord]
    total: int = Field(description="Number of messages returned")


class ProceedResponse(BaseModel):
    """Whether the partner has shared enough to leave the chat."""

    can_proceed: bool
    human_message_count: int
    required: int
