"""File-upload provider settings (UploadThing-compatible REST API).

Environment variables use UPLOADTHING_ prefix.
Example: UPLOADTHING_TOKEN=sk_live_...
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class UploadSettings(BaseSettings):
    """File-storage provider configuration."""

    base_url: str = Field(
        default="https://api.uploadthing.com",
        description="Provider REST API base URL",
    )
    token: SecretStr = Field(default=SecretStr(""), description="Server API key")
    timeout: float = Field(default=15.0, ge=1.0, le=120.0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, ge=0, le=10)

    model_config = SettingsConfigDict(
        env_prefix="UPLOADTHING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
