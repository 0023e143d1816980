"""Keyset pagination.

Every list endpoint pages through its collection in ``(sort_key DESC, id DESC)``
order using a seek condition instead of OFFSET:

    from video_service.core.pagination import KeysetOrder, KeysetPaginator

    paginator = KeysetPaginator("videos", KeysetOrder(Video.updated_at, Video.id))
    page = await paginator.fetch_page(session, stmt, cursor=cursor, limit=20)

    page.items        # up to 20 rows
    page.next_cursor  # Cursor | None

Cursors are exchanged with clients as opaque tokens via ``CursorCodec`` and
returned in ``PageResponse.next_cursor``.
"""

from video_service.core.pagination.cursor import Cursor, CursorCodec, SortKey
from video_service.core.pagination.filters import KeysetFilter, KeysetOrder
from video_service.core.pagination.paginator import (
    MAX_PAGE_LIMIT,
    MIN_PAGE_LIMIT,
    KeysetPaginator,
    Page,
    fetch_page,
    resolve_cursor,
    validate_limit,
)
from video_service.core.pagination.schemas import PageResponse

__all__ = [
    "MAX_PAGE_LIMIT",
    "MIN_PAGE_LIMIT",
    # Cursor encoding
    "Cursor",
    "CursorCodec",
    # Query building
    "KeysetFilter",
    "KeysetOrder",
    # Engine
    "KeysetPaginator",
    "Page",
    # Responses
    "PageResponse",
    "SortKey",
    "fetch_page",
    "resolve_cursor",
    "validate_limit",
]
