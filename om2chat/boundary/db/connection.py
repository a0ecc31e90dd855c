"""
Async engine and session lifecycle for the pgvector database.

One engine (and its pool) per process; one AsyncSession per HTTP request.
Sessions never commit on their own: DocumentStore decides when a unit of
work is complete.

Dependencies: sqlalchemy, asyncpg, om2chat.configs
System role: Database connection lifecycle management
"""

import logging
from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from om2chat.configs import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Build the process-wide asyncpg engine from DatabaseSettings.

    Connections are pinged on checkout so a restarted database does not
    surface as a failed chat request.
    """
    db_config = get_settings().database
    logger.info(
        f"{__name__}:get_async_engine - creating engine "
        f"host={db_config.host} db={db_config.db} pool_size={db_config.pool_size}"
    )
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the shared engine; rows stay readable after commit."""
    return async_sessionmaker(
        bind=get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request-scoped session.

    Anything left uncommitted when the request ends is rolled back by
    the session's close.

    Usage:
        @router.get("/documents/{document_id}")
        async def get_document(document_id: UUID, db: AsyncSession = Depends(get_async_db)):
            ...
    """
    async with get_async_session_factory()() as session:
        yield session


async def dispose_engine() -> None:
    """Close pooled connections at shutdown and forget the cached engine."""
    if get_async_engine.cache_info().currsize == 0:
        return
    await get_async_engine().dispose()
    get_async_session_factory.cache_clear()
    get_async_engine.cache_clear()
