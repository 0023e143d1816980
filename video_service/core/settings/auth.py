"""Caller identity settings.

Authentication itself happens upstream (identity gateway); this service only
reads the verified subject from a trusted request header.

Environment variables use AUTH_ prefix.
Example: AUTH_SUBJECT_HEADER=X-Auth-Subject
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Identity header configuration."""

    subject_header: str = Field(
        default="X-Auth-Subject",
        min_length=1,
        max_length=100,
        description="Request header carrying the authenticated identity-provider subject",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
