"""
Create database schema.

Enables the pgvector extension and creates all ORM tables.

Usage:
    python -m om2chat.boundary.db.create_tables

Dependencies: sqlalchemy, om2chat.boundary.db
System role: One-time database initialisation
"""

import asyncio
import logging

from sqlalchemy import text

from om2chat.boundary.db.base import Base
from om2chat.boundary.db.connection import get_async_engine
from om2chat.observability.logger import configure_logging

import om2chat.boundary.db.models  # noqa: F401  (register models on Base.metadata)

logger = logging.getLogger(__name__)


async def create_tables() -> None:
    """Create the vector extension and every table registered on Base."""
    engine = get_async_engine()
    async with engine.begin() as conn:
        await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()
    logger.info("Tables created: %s", ", ".join(sorted(Base.metadata.tables)))


if __name__ == "__main__":
    configure_logging()
    asyncio.run(create_tables())
