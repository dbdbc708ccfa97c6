"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: mediator.configs, mediator.application, mediator.boundary
System role: DI container for service injection
"""

from uuid import UUID

from fastapi import Depends, Header, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from mediator.application.services import (
    ChatService,
    HandoffService,
    ReportService,
    SessionService,
)
from mediator.boundary.db import get_async_db, get_async_session_factory
from mediator.boundary.db.models.session_model import SessionModel
from mediator.boundary.feed import MessageFeed, get_message_feed
from mediator.configs import Settings, get_settings
from mediator.core.exceptions import AuthenticationError, NotFoundError
from mediator.core.gateway import MediatorGateway
from mediator.core.roles import PartnerRole

PIN_HEADER = "X-Partner-Pin"


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._gateway: MediatorGateway | None = None

    @property
    def gateway(self) -> MediatorGateway:
        """Get cached text-generation gateway (model client built on first call)."""
        if self._gateway is None:
            self._gateway = MediatorGateway(settings=get_settings().gemini)
        return self._gateway

    def clear(self) -> None:
        """Clear all cached instances."""
        self._gateway = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_gateway() -> MediatorGateway:
    """Get the shared gateway."""
    return get_service_cache().gateway


def get_feed() -> MessageFeed:
    """Get the process-wide message feed."""
    return get_message_feed()


def get_session_service(db: AsyncSession = Depends(get_async_db)) -> SessionService:
    """
    Get session service instance.

    Args:
        db: Async database session (injected via Depends)

    Returns:
        SessionService: Session service instance
    """
    return SessionService(db=db, settings=get_settings().mediation)


def get_chat_service(
    db: AsyncSession = Depends(get_async_db),
    gateway: MediatorGateway = Depends(get_gateway),
    feed: MessageFeed = Depends(get_feed),
) -> ChatService:
    """
    Get chat service instance.

    Replies are stored through an independent session so they survive a
    client disconnect.
    """
    return ChatService(
        db=db,
        gateway=gateway,
        feed=feed,
        settings=get_settings().mediation,
        session_factory=get_async_session_factory(),
    )


def get_handoff_service(
    db: AsyncSession = Depends(get_async_db),
    gateway: MediatorGateway = Depends(get_gateway),
) -> HandoffService:
    """Get hand-off service instance."""
    return HandoffService(db=db, gateway=gateway)


def get_report_service(
    db: AsyncSession = Depends(get_async_db),
    gateway: MediatorGateway = Depends(get_gateway),
) -> ReportService:
    """Get report service instance."""
    return ReportService(db=db, gateway=gateway, settings=get_settings().mediation)


async def authorize_partner(
    session_id: UUID,
    role: PartnerRole,
    pin: str | None,
    session_service: SessionService,
) -> SessionModel:
    """
    Resolve the session and check the PIN for the role, as HTTP errors.

    Raises:
        HTTPException(404): Unknown session
        HTTPException(403): PIN does not match the role
    """
    try:
        return await session_service.authorize_role(session_id, role, pin)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=e.message)


async def get_partner_session(
    session_id: UUID,
    role: PartnerRole,
    x_partner_pin: str | None = Header(default=None),
    session_service: SessionService = Depends(get_session_service),
) -> SessionModel:
    """Dependency for role-scoped routes: the session the PIN header unlocks."""
    return await authorize_partner(session_id, role, x_partner_pin, session_service)


async def get_partner_a_session(
    session_id: UUID,
    x_partner_pin: str | None = Header(default=None),
    session_service: SessionService = Depends(get_session_service),
) -> SessionModel:
    """Dependency for Partner A-only routes."""
    return await authorize_partner(session_id, PartnerRole.PARTNER_A, x_partner_pin, session_service)
