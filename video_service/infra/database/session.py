"""Database session management with the psycopg3 async driver."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from video_service.core.database import Base
from video_service.core.settings import get_app_settings, get_db_settings
from video_service.infra.metrics.tracking import track_query_duration
from video_service.utils.retry import retry

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = logging.getLogger(__name__)

FALLBACK_DATABASE_URL = "sqlite+aiosqlite:///./video_service.db"

db_settings = get_db_settings()
app_settings = get_app_settings()

database_url = db_settings.url if db_settings.is_configured else FALLBACK_DATABASE_URL
engine_kwargs = db_settings.sqlalchemy_engine_kwargs() if db_settings.is_configured else {}
engine_kwargs["echo"] = db_settings.echo or app_settings.debug

engine = create_async_engine(database_url, **engine_kwargs)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


# ============================================================================
# Query Duration Metrics
# ============================================================================


@event.listens_for(engine.sync_engine, "before_cursor_execute")
def _before_cursor_execute(
    conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: Any
) -> None:
    _ = conn, cursor, statement, parameters, executemany
    context._query_start_time = time.perf_counter()


@event.listens_for(engine.sync_engine, "after_cursor_execute")
def _after_cursor_execute(
    conn: Any, cursor: Any, statement: str, parameters: Any, context: Any, executemany: Any
) -> None:
    _ = conn, cursor, parameters, executemany
    duration = time.perf_counter() - context._query_start_time
    verb = statement.lstrip().split(" ", 1)[0].upper() if statement else "UNKNOWN"
    track_query_duration(verb, duration)


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Get async database session.

    Example:
        async with get_async_session() as session:
            result = await session.execute(select(Video))
    """
    async with AsyncSessionLocal() as session:
        yield session


@retry(
    max_attempts=db_settings.startup_retry_attempts,
    initial_delay=db_settings.startup_retry_delay,
    max_delay=30.0,
)
async def init_database() -> None:
    """Check database connectivity with retry during startup.

    Raises:
        RetryError: If the database is unreachable after all attempts.
    """
    logger.info(
        "Initializing database connection",
        extra={"max_attempts": db_settings.startup_retry_attempts},
    )
    async with engine.connect() as conn:
        await conn.execute(text("SELECT 1"))
    logger.info("Database connection established", extra={"dialect": engine.dialect.name})


async def create_schema() -> None:
    """Create any missing tables for the registered models."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database schema ensured", extra={"tables": len(Base.metadata.tables)})


async def close_database() -> None:
    """Dispose of the engine's connection pool during shutdown."""
    logger.info("Closing database connection")
    await engine.dispose()


__all__ = [
    "AsyncSessionLocal",
    "close_database",
    "create_schema",
    "engine",
    "get_async_session",
    "init_database",
]
