"""API-specific dependencies."""

# Re-export common dependencies
from .dependencies import (
    PIN_HEADER,
    get_chat_service,
    get_feed,
    get_gateway,
    get_handoff_service,
    get_partner_a_session,
    get_partner_session,
    get_report_service,
    get_service_cache,
    get_session_service,
    get_settings_dependency,
)

__all__ = [
    "PIN_HEADER",
    "get_chat_service",
    "get_feed",
    "get_gateway",
    "get_handoff_service",
    "get_partner_a_session",
    "get_partner_session",
    "get_report_service",
    "get_service_cache",
    "get_session_service",
    "get_settings_dependency",
]
