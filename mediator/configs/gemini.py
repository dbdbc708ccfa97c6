"""
Gemini model configuration settings.

Settings for the text-generation model used by the mediator gateway.

Dependencies: pydantic_settings
System role: Text-generation model configuration
"""

from pydantic import Field
from pydantic_settings import SettingsConfigDict

from mediator.configs.base import BaseSettings


class GeminiSettings(BaseSettings):
    """Google Gemini configuration for the mediator gateway."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="GEMINI_",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str | None = Field(
        default=None,
        description="Google AI Studio API key (gateway calls fail without it)",
    )
    model: str = Field(default="gemini-2.5-flash", description="Gemini model identifier")
    temperature: float = Field(default=0.7, ge=0.0, le=2.0, description="Sampling temperature")
    timeout: float = Field(default=30.0, description="Request timeout in seconds")
    max_retries: int = Field(default=2, description="Retries on transient API failures")
