"""Unified settings composition for convenient access.

Usage:
    from video_service.core.settings import get_settings

    settings = get_settings()
    print(settings.app.api_prefix)
    print(settings.media.base_url)

Each nested settings class still loads from its own environment prefix.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache

from .app import AppSettings
from .auth import AuthSettings
from .logs import LoggingSettings
from .media import MediaSettings
from .pagination import PaginationSettings
from .postgres import PostgresSettings
from .uploads import UploadSettings
from .workflow import WorkflowSettings


@dataclass(frozen=True, slots=True)
class Settings:
    """All domain settings in one object."""

    app: AppSettings = field(default_factory=AppSettings)
    db: PostgresSettings = field(default_factory=PostgresSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    pagination: PaginationSettings = field(default_factory=PaginationSettings)
    auth: AuthSettings = field(default_factory=AuthSettings)
    media: MediaSettings = field(default_factory=MediaSettings)
    uploads: UploadSettings = field(default_factory=UploadSettings)
    workflow: WorkflowSettings = field(default_factory=WorkflowSettings)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached unified settings."""
    return Settings()
