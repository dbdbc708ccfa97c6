"""API routers."""

from .handoff import router as handoff_router
from .health import router as health_router
from .report import router as report_router
from .sessions import router as sessions_router
from .thread_stream import router as thread_stream_router
from .threads import router as threads_router

__all__ = [
    "handoff_router",
    "health_router",
    "report_router",
    "sessions_router",
    "thread_stream_router",
    "threads_router",
]
