"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, and configures lifespan.

Dependencies: fastapi, mediator.api, mediator.observability, mediator.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mediator import __version__
from mediator.api import api_router
from mediator.api.deps import get_service_cache
from mediator.api.routers import thread_stream_router
from mediator.boundary.db.connection import get_async_engine
from mediator.boundary.db.create_tables import create_tables
from mediator.configs import get_settings
from mediator.observability.logger import configure_logging
from mediator.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging and, outside production or on SQLite, makes sure
    the tables exist. Releases the gateway and engine on shutdown.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info("Application startup: logging configured")

    if settings.is_development or settings.database.is_sqlite:
        try:
            await create_tables()
        except Exception as e:
            logger.exception(
                "Failed to create database tables",
                extra={"error": str(e)},
            )
            raise

    logger.info(
        "Application startup complete",
        extra={"environment": settings.environment, "model": settings.gemini.model},
    )

    yield

    # Shutdown
    get_service_cache().clear()
    await get_async_engine().dispose()
    logger.info("Application shutdown")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Duet Mediator API",
        description="Two-partner mediation with private AI-guided threads and a joint report",
        version=__version__,
        lifespan=lifespan,
    )

    # Add observability middleware (added first = last to execute)
    app.add_middleware(CorrelationMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register API routes
    app.include_router(api_router, prefix="/api/v1")

    # WebSocket feed lives outside the versioned prefix
    app.include_router(thread_stream_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mediator.main:app",
        host="localhost",
        port=8082,
        reload=True,
    )
