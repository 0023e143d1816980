"""Pagination settings for list endpoints.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=20

The hard upper bound of 100 items per page is enforced by the keyset
paginator itself; ``max_limit`` may only lower it.
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size used when the request omits ``limit``.
        max_limit: Largest page size accepted by list endpoints.
    """

    default_limit: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Default page size when limit not specified",
    )
    max_limit: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Maximum allowed page size",
    )

    @model_validator(mode="after")
    def validate_limits(self) -> PaginationSettings:
        if self.default_limit > self.max_limit:
            msg = "default_limit cannot exceed max_limit"
            raise ValueError(msg)
        return self

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )
