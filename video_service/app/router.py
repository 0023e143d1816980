"""Router registry and setup."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from video_service.core.settings import get_app_settings
from video_service.features.categories.router import router as categories_router
from video_service.features.health.router import router as health_router
from video_service.features.metrics.router import router as metrics_router
from video_service.features.playlists.router import router as playlists_router
from video_service.features.studio.router import router as studio_router
from video_service.features.subscriptions.router import router as subscriptions_router
from video_service.features.users.router import router as users_router
from video_service.features.videos.router import router as videos_router

if TYPE_CHECKING:
    from fastapi import FastAPI

    from video_service.core.settings.app import AppSettings

logger = logging.getLogger(__name__)


def setup_routers(app: FastAPI, app_settings: AppSettings | None = None) -> None:
    """Register all feature routers with the application.

    Args:
        app: FastAPI application instance.
        app_settings: Optional application settings override for the API prefix.
    """
    app_settings = app_settings or get_app_settings()
    api_prefix = app_settings.api_prefix

    # Include metrics endpoint (no prefix - accessible at /metrics)
    app.include_router(metrics_router)

    app.include_router(health_router, prefix=api_prefix)
    app.include_router(videos_router, prefix=api_prefix)
    app.include_router(studio_router, prefix=api_prefix)
    app.include_router(playlists_router, prefix=api_prefix)
    app.include_router(categories_router, prefix=api_prefix)
    app.include_router(subscriptions_router, prefix=api_prefix)
    app.include_router(users_router, prefix=api_prefix)

    logger.debug("Routers registered", extra={"api_prefix": api_prefix})
