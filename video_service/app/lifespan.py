"""Application lifespan management.

Startup Order:
1. Core (logging)
2. Database - conditional on configuration

Shutdown Order: provider clients, database, then logging flush.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from video_service.core.dependencies.providers import close_provider_clients
from video_service.core.settings import get_app_settings, get_db_settings, get_logging_settings
from video_service.infra.logging.config import complete, setup_logging

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

logger = logging.getLogger(__name__)


async def _startup_core() -> None:
    app = get_app_settings()
    setup_logging(log_settings=get_logging_settings(), service_name=app.service_name, force=True)
    logger.info(
        "Application starting",
        extra={"service": app.service_name, "environment": app.environment},
    )


async def _startup_database() -> None:
    """Check connectivity and create missing tables."""
    from video_service.infra.database.session import create_schema, init_database

    db = get_db_settings()
    if not db.is_configured:
        logger.warning("Database not configured, using the local fallback database")

    try:
        await init_database()
        if db.create_tables:
            await create_schema()
    except Exception as e:
        if db.startup_require_db:
            logger.exception(
                "Database required but unavailable, failing startup",
                extra={"error": str(e), "startup_require_db": True},
            )
            raise
        logger.warning(
            "Database unavailable, continuing in degraded mode",
            extra={"error": str(e), "startup_require_db": False},
        )


async def _shutdown_database() -> None:
    from video_service.infra.database.session import close_database

    await close_database()
    logger.info("Database connection closed")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifecycle.

    Args:
        app: FastAPI application instance.

    Yields:
        None during application runtime.
    """
    _ = app

    await _startup_core()
    await _startup_database()

    app_settings = get_app_settings()
    logger.info(
        "Application startup complete - listening on %s:%s",
        app_settings.host,
        app_settings.port,
        extra={"service": app_settings.service_name, "version": app_settings.version},
    )

    yield

    logger.info("Application shutting down", extra={"service": app_settings.service_name})
    await close_provider_clients()
    await _shutdown_database()
    logger.info("Application shutdown complete")
    complete()


__all__ = ["lifespan"]
