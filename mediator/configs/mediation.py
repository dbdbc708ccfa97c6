"""
Mediation protocol settings.

Thresholds and sizes that drive the session and conversation flow.

Dependencies: pydantic_settings
System role: Mediation protocol configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from mediator.configs.base import BaseSettings


class MediationSettings(BaseSettings):
    """Thresholds for proceeding, reporting and session code generation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MEDIATION_",
        case_sensitive=False,
        extra="ignore",
    )

    context_window: int = Field(
        default=5,
        ge=0,
        description="Number of most recent thread messages sent with each reply request",
    )
    min_messages_to_proceed: int = Field(
        default=3,
        ge=1,
        description="Human messages required before a partner may leave the chat",
    )
    min_messages_for_report: int = Field(
        default=2,
        ge=1,
        description="Human messages required from each partner before a report is generated",
    )
    session_code_length: int = Field(default=6, ge=4, description="Length of session codes")
    session_code_attempts: int = Field(
        default=5,
        ge=1,
        description="Attempts to find an unused session code before giving up",
    )
    poll_interval_seconds: float = Field(
        default=3.0,
        gt=0,
        description="Re-poll interval for live thread feeds",
    )
    fallback_topic: str = Field(
        default="important relationship topics",
        description="Neutral topic shown when a bridge summary cannot be generated",
    )
