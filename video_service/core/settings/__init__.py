"""Modular Pydantic Settings v2 configuration.

Settings are split by domain (app/db/logging/pagination/auth and one class per
third-party provider), frozen, and loaded through LRU-cached getters:

    from video_service.core.settings import get_app_settings

Configuration precedence (highest to lowest):
    1. init kwargs (testing/overrides)
    2. Environment variables
    3. .env file
"""

from __future__ import annotations

from .loader import (
    clear_all_caches,
    get_app_settings,
    get_auth_settings,
    get_db_settings,
    get_logging_settings,
    get_media_settings,
    get_pagination_settings,
    get_upload_settings,
    get_workflow_settings,
)
from .unified import Settings, get_settings

__all__ = [
    "Settings",
    "clear_all_caches",
    "get_app_settings",
    "get_auth_settings",
    "get_db_settings",
    "get_logging_settings",
    "get_media_settings",
    "get_pagination_settings",
    "get_settings",
    "get_upload_settings",
    "get_workflow_settings",
]
