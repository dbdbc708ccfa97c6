"""
Shared test fixtures and configuration for entire test suite.

Provides: In-memory database sessions, gateway mocks, seeded mediation sessions
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock

import pytest


@pytest.fixture
async def test_engine():
    """
    Create in-memory SQLite async engine with all tables.

    Yields:
        AsyncEngine: Engine bound to a single shared connection (lazy imported to avoid settings issues)
    """
    from sqlalchemy.ext.asyncio import create_async_engine
    from sqlalchemy.pool import StaticPool
    from mediator.boundary.db.base import Base
    from mediator.boundary.db import models  # noqa: F401

    # Use SQLite in-memory database for tests
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Create all tables
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def test_session_factory(test_engine):
    """Session factory over the test engine, configured like production."""
    from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

    return async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        autoflush=False,
        expire_on_commit=False,
    )


@pytest.fixture
async def test_async_db(test_session_factory):
    """
    Create a session on the in-memory database.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    async with test_session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def mock_gateway() -> AsyncMock:
    """
    Create mock MediatorGateway.

    Returns:
        AsyncMock: Gateway whose reply/summary/report calls succeed by default
    """
    from mediator.core.gateway import MediationReport, MediatorGateway

    gateway = AsyncMock(spec=MediatorGateway)
    gateway.generate_reply = AsyncMock(return_value="That sounds hard. What happened next?")
    gateway.generate_summary = AsyncMock(return_value="Sharing household chores fairly")
    gateway.generate_report = AsyncMock(
        return_value=MediationReport(
            analysis="Both of you want to feel appreciated at home.",
            advice_for_a="Sam feels overwhelmed after long shifts.",
            advice_for_b="Alex feels unseen when plans change last minute.",
        )
    )
    return gateway


@pytest.fixture
async def waiting_session(test_async_db):
    """Session initiated by Alex (PIN 1111); Partner B has not joined."""
    from mediator.application.services.session_service import SessionService

    return await SessionService(test_async_db).create_session("Alex", "alex@example.com", "1111")


@pytest.fixture
async def active_session(test_async_db, waiting_session):
    """Session where Sam (PIN 9999) has joined as Partner B."""
    from mediator.application.services.session_service import SessionService

    session, _ = await SessionService(test_async_db).join_or_login(
        waiting_session.session_code.lower(), "9999", name="Sam", email="sam@example.com"
    )
    return session


@pytest.fixture
def session_id():
    """Generate a test session ID."""
    return uuid.uuid4()
