"""Keyset pagination query parameters.

Usage:
    @router.get("/videos", response_model=PageResponse[VideoResponse])
    async def list_videos(
        page: Annotated[KeysetParams, Depends(get_keyset_params)],
        ...
    ):
        result = await service.list_public(cursor=page.cursor, limit=page.limit)

The limit is deliberately not bounded at the query-parameter level: the
pagination engine owns the ``[1, 100]`` contract and reports violations as
``invalid-page-limit`` problem responses.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Query
from pydantic import BaseModel, ConfigDict, Field

from video_service.core.exceptions import ValidationException
from video_service.core.settings import get_pagination_settings


class KeysetParams(BaseModel):
    """Cursor and page size for a keyset-paginated list."""

    model_config = ConfigDict(frozen=True)

    cursor: str | None = Field(default=None, description="Opaque cursor from a previous page")
    limit: int = Field(description="Maximum number of items to return")


def get_keyset_params(
    cursor: Annotated[
        str | None,
        Query(description="Opaque cursor returned as `next_cursor` by the previous page"),
    ] = None,
    limit: Annotated[
        int | None,
        Query(description="Page size (1-100); defaults to the configured page size"),
    ] = None,
) -> KeysetParams:
    """Resolve paging query parameters, applying the configured default size."""
    settings = get_pagination_settings()
    if limit is None:
        limit = settings.default_limit
    elif limit > settings.max_limit:
        raise ValidationException(
            detail=f"limit must not exceed {settings.max_limit}",
            type="invalid-page-limit",
            extra={"limit": limit},
        )
    return KeysetParams(cursor=cursor, limit=limit)


__all__ = ["KeysetParams", "get_keyset_params"]
