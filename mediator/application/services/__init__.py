"""Service orchestrators."""

from .chat_service import ChatService
from .handoff_service import HandoffService
from .report_service import ReportService
from .session_service import SessionService
from .thread_sync import ThreadSync

__all__ = [
    "ChatService",
    "HandoffService",
    "ReportService",
    "SessionService",
    "ThreadSync",
]
