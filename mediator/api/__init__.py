"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    handoff_router,
    health_router,
    report_router,
    sessions_router,
    threads_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(sessions_router)
api_router.include_router(threads_router)
api_router.include_router(handoff_router)
api_router.include_router(report_router)

__all__ = ["api_router"]
