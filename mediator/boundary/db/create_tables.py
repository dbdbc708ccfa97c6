"""
Create database tables from ORM metadata.

Development helper; run with `python -m mediator.boundary.db.create_tables`.
"""

import asyncio
import logging

from mediator.boundary.db.base import Base
from mediator.boundary.db.connection import get_async_engine

# Register models with metadata
from mediator.boundary.db import models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Create all tables that do not exist yet."""
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(create_tables())
