"""Keyset pagination engine shared by every list endpoint.

``KeysetPaginator.fetch_page`` takes a prepared statement (joins and
aggregates already attached), an optional filter predicate, the collection's
``KeysetOrder``, an optional cursor and a page size, and returns one page of
rows in strictly descending ``(sort_key, id)`` order together with the cursor
for the next page.

Chaining ``next_cursor`` over an unchanging collection visits every matching
row exactly once and ends with ``next_cursor is None``.

The engine validates only the page size and the cursor token's shape. A
cursor whose sort key has the wrong type for the collection (an integer count
replayed on a timestamp feed, or the reverse) yields an empty page without
querying the store. A cursor taken from another collection with the same key
type is not detected and simply produces whatever slice the seek condition
selects.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from video_service.core.exceptions import ValidationException
from video_service.core.pagination.cursor import Cursor, CursorCodec
from video_service.core.pagination.filters import KeysetFilter, KeysetOrder
from video_service.infra.logging import get_lazy_logger
from video_service.infra.metrics.tracking import track_page

if TYPE_CHECKING:
    from sqlalchemy import Row, Select
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.sql.elements import ColumnElement

MIN_PAGE_LIMIT = 1
MAX_PAGE_LIMIT = 100

SORT_KEY_LABEL = "keyset_sort_key"
ROW_ID_LABEL = "keyset_row_id"

logger = logging.getLogger(__name__)
_lazy = get_lazy_logger(__name__)

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True, slots=True)
class Page(Generic[T]):
    """One page of a keyset-paginated collection.

    Attributes:
        items: Rows in descending ``(sort_key, id)`` order, at most ``limit`` long.
        next_cursor: Position of the last item when more rows exist, else None.
    """

    items: Sequence[T]
    next_cursor: Cursor | None = None

    @property
    def has_more(self) -> bool:
        return self.next_cursor is not None

    def map(self, transform: Callable[[T], U]) -> Page[U]:
        """Return a page with every item transformed and the same cursor."""
        return Page(items=[transform(item) for item in self.items], next_cursor=self.next_cursor)


def validate_limit(limit: int) -> int:
    """Reject page sizes outside ``[1, 100]``."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationException(
            detail="limit must be an integer",
            type="invalid-page-limit",
            extra={"limit": repr(limit)},
        )
    if not MIN_PAGE_LIMIT <= limit <= MAX_PAGE_LIMIT:
        raise ValidationException(
            detail=f"limit must be between {MIN_PAGE_LIMIT} and {MAX_PAGE_LIMIT}",
            type="invalid-page-limit",
            extra={"limit": limit},
        )
    return limit


def resolve_cursor(cursor: Cursor | str | None) -> Cursor | None:
    """Accept a decoded cursor, an opaque token, or nothing."""
    if cursor is None or isinstance(cursor, Cursor):
        return cursor
    try:
        return CursorCodec.decode(cursor)
    except ValueError as e:
        raise ValidationException(
            detail="cursor is malformed",
            type="invalid-cursor",
            extra={"reason": str(e)},
        ) from e


class KeysetPaginator:
    """Fetch pages of one collection in ``(sort_key DESC, id DESC)`` order.

    Example:
        paginator = KeysetPaginator("videos", KeysetOrder(Video.updated_at, Video.id))
        page = await paginator.fetch_page(
            session,
            select(Video, User).join(User, User.id == Video.user_id),
            where=Video.visibility == Visibility.PUBLIC,
            cursor=request_cursor,
            limit=20,
        )
    """

    __slots__ = ("collection", "order")

    def __init__(self, collection: str, order: KeysetOrder) -> None:
        self.collection = collection
        self.order = order

    async def fetch_page(
        self,
        session: AsyncSession,
        statement: Select[Any],
        *,
        cursor: Cursor | str | None,
        limit: int,
        where: ColumnElement[bool] | None = None,
    ) -> Page[Row[Any]]:
        """Fetch one page.

        A cursor whose sort key type does not match ``order.key_type`` returns
        an empty last page and the store is not queried.

        Args:
            session: Database session
            statement: Select with the row shape to return (joins/aggregates attached)
            cursor: Cursor of the previous page's last row, or None for the first page
            limit: Page size in ``[1, 100]``
            where: Filter predicate; None means no filter

        Returns:
            Page of result rows. Each row also carries the ``keyset_sort_key``
            and ``keyset_row_id`` columns used to build cursors.

        Raises:
            ValidationException: Limit out of range or malformed cursor token;
                raised before the store is queried.
        """
        limit = validate_limit(limit)
        position = resolve_cursor(cursor)

        if position is not None and not self.order.accepts(position.sort_key):
            logger.info(
                "Cursor sort key does not match collection",
                extra={
                    "collection": self.collection,
                    "cursor_key_type": type(position.sort_key).__name__,
                    "expected_key_type": self.order.key_type.__name__,
                },
            )
            track_page(self.collection, 0, False)
            return Page(items=[])

        statement = statement.add_columns(
            self.order.sort_key.label(SORT_KEY_LABEL),
            self.order.id_column.label(ROW_ID_LABEL),
        )
        if where is not None:
            statement = statement.where(where)
        statement = KeysetFilter(self.order, cursor=position, limit=limit).apply(statement)

        rows = list((await session.execute(statement)).all())

        has_more = len(rows) > limit
        if has_more:
            rows = rows[:limit]

        next_cursor = None
        if has_more:
            last = rows[-1]._mapping
            next_cursor = Cursor(id=str(last[ROW_ID_LABEL]), sort_key=last[SORT_KEY_LABEL])

        track_page(self.collection, len(rows), has_more)
        _lazy.debug(
            lambda: f"db.keyset_page: {self.collection}(limit={limit}, "
            f"after={position.id if position else None}) -> {len(rows)} rows, has_more={has_more}"
        )
        return Page(items=rows, next_cursor=next_cursor)


async def fetch_page(
    session: AsyncSession,
    statement: Select[Any],
    *,
    order: KeysetOrder,
    cursor: Cursor | str | None,
    limit: int,
    where: ColumnElement[bool] | None = None,
    collection: str = "default",
) -> Page[Row[Any]]:
    """Functional form of ``KeysetPaginator.fetch_page`` for one-off queries.

    Repositories keep a ``KeysetPaginator`` per collection so page metrics are
    labelled; this builds a throwaway one under ``collection``.
    """
    return await KeysetPaginator(collection, order).fetch_page(
        session,
        statement,
        cursor=cursor,
        limit=limit,
        where=where,
    )


__all__ = [
    "MAX_PAGE_LIMIT",
    "MIN_PAGE_LIMIT",
    "KeysetPaginator",
    "Page",
    "fetch_page",
    "resolve_cursor",
    "validate_limit",
]
