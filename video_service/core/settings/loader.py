"""LRU-cached settings loaders.

Settings are loaded and validated once, then cached for the lifetime of the process.

Usage:
    from video_service.core.settings.loader import get_app_settings

    settings = get_app_settings()  # First call: loads and validates
    settings = get_app_settings()  # Subsequent calls: returns cached instance

Testing:
    In tests, clear the cache to force reload:
    clear_all_caches()
"""

from __future__ import annotations

from functools import lru_cache

from .app import AppSettings
from .auth import AuthSettings
from .logs import LoggingSettings
from .media import MediaSettings
from .pagination import PaginationSettings
from .postgres import PostgresSettings
from .uploads import UploadSettings
from .workflow import WorkflowSettings


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """Get cached application settings."""
    return AppSettings()


@lru_cache(maxsize=1)
def get_db_settings() -> PostgresSettings:
    """Get cached database settings."""
    return PostgresSettings()


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached logging settings."""
    return LoggingSettings()


@lru_cache(maxsize=1)
def get_pagination_settings() -> PaginationSettings:
    """Get cached pagination settings."""
    return PaginationSettings()


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    """Get cached identity header settings."""
    return AuthSettings()


@lru_cache(maxsize=1)
def get_media_settings() -> MediaSettings:
    """Get cached media-processing provider settings."""
    return MediaSettings()


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """Get cached file-upload provider settings."""
    return UploadSettings()


@lru_cache(maxsize=1)
def get_workflow_settings() -> WorkflowSettings:
    """Get cached workflow trigger settings."""
    return WorkflowSettings()


def clear_all_caches() -> None:
    """Clear all settings caches.

    Useful for testing or when you need to force reload settings.
    """
    get_app_settings.cache_clear()
    get_db_settings.cache_clear()
    get_logging_settings.cache_clear()
    get_pagination_settings.cache_clear()
    get_auth_settings.cache_clear()
    get_media_settings.cache_clear()
    get_upload_settings.cache_clear()
    get_workflow_settings.cache_clear()
