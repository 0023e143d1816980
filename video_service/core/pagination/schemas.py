"""Response schema for keyset-paginated list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Generic, TypeVar

from pydantic import BaseModel, Field

from video_service.core.pagination.cursor import CursorCodec

if TYPE_CHECKING:
    from video_service.core.pagination.paginator import Page

T = TypeVar("T")


class PageResponse(BaseModel, Generic[T]):
    """REST page of items with an opaque cursor for the next request.

    Usage:
        @router.get("/videos", response_model=PageResponse[VideoResponse])
        async def list_videos(...):
            page = await service.list_public(...)
            return PageResponse[VideoResponse].from_page(page)
    """

    items: list[T] = Field(default_factory=list, description="Items on this page")
    next_cursor: str | None = Field(
        default=None,
        description="Pass back as `cursor` to fetch the next page; null on the last page",
    )

    @classmethod
    def from_page(cls, page: Page[Any]) -> PageResponse[T]:
        return cls(
            items=list(page.items),
            next_cursor=CursorCodec.encode_optional(page.next_cursor),
        )


__all__ = ["PageResponse"]
