"""Video-processing provider settings (Mux-compatible REST API).

Environment variables use MUX_ prefix.
Example: MUX_TOKEN_ID=..., MUX_TOKEN_SECRET=...
"""

from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class MediaSettings(BaseSettings):
    """Media-processing provider configuration."""

    base_url: str = Field(
        default="https://api.mux.com",
        description="Provider REST API base URL",
    )
    token_id: str = Field(default="", description="Access token id (basic auth user)")
    token_secret: SecretStr = Field(
        default=SecretStr(""),
        description="Access token secret (basic auth password)",
    )
    thumbnail_base_url: str = Field(
        default="https://image.mux.com",
        description="Base URL for playback-id derived thumbnails and previews",
    )
    cors_origin: str = Field(
        default="*",
        description="Origin allowed to PUT the file to a direct upload URL",
    )
    timeout: float = Field(default=30.0, ge=1.0, le=300.0, description="Request timeout in seconds")
    max_retries: int = Field(default=3, ge=0, le=10)

    model_config = SettingsConfigDict(
        env_prefix="MUX_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        return bool(self.token_id and self.token_secret.get_secret_value())
