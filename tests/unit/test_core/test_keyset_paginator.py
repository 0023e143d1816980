"""Unit tests for the keyset pagination engine.

Uses a private table so ordering can be checked against hand-picked keys.
"""

from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy import DateTime, Integer, String, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.pool import StaticPool

from video_service.core.exceptions import ValidationException
from video_service.core.pagination import (
    Cursor,
    CursorCodec,
    KeysetOrder,
    KeysetPaginator,
    Page,
    PageResponse,
    fetch_page,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator


class _Base(DeclarativeBase):
    pass


class Item(_Base):
    __tablename__ = "items"

    id: Mapped[str] = mapped_column(String(20), primary_key=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    stamp: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    kind: Mapped[str] = mapped_column(String(10), nullable=False, default="a")


BY_SCORE = KeysetOrder(Item.score, Item.id, key_type=int)
BY_STAMP = KeysetOrder(Item.stamp, Item.id)
ORIGIN = datetime(2025, 1, 1)


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(_Base.metadata.create_all)
    async with async_sessionmaker(engine, expire_on_commit=False)() as s:
        yield s
    await engine.dispose()


async def _seed(session: AsyncSession, *rows: tuple[str, int]) -> None:
    session.add_all(
        Item(id=row_id, score=score, stamp=ORIGIN + timedelta(minutes=score))
        for row_id, score in rows
    )
    await session.flush()


async def _drain(
    session: AsyncSession,
    paginator: KeysetPaginator,
    limit: int,
) -> list[Page]:
    pages: list[Page] = []
    cursor = None
    while True:
        page = await paginator.fetch_page(session, select(Item), cursor=cursor, limit=limit)
        pages.append(page)
        if page.next_cursor is None:
            return pages
        cursor = page.next_cursor


def _ids(page: Page) -> list[str]:
    return [row.Item.id for row in page.items]


# ──────────────────────────────────────────────────────────────
# Ordering and cursors
# ──────────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_single_item_pages_walk_descending(session: AsyncSession) -> None:
    await _seed(session, ("a", 1), ("b", 2), ("c", 3))
    paginator = KeysetPaginator("items", BY_SCORE)

    first = await paginator.fetch_page(session, select(Item), cursor=None, limit=1)
    assert _ids(first) == ["c"]
    assert first.next_cursor == Cursor(id="c", sort_key=3)

    second = await paginator.fetch_page(session, select(Item), cursor=first.next_cursor, limit=1)
    assert _ids(second) == ["b"]
    assert second.next_cursor == Cursor(id="b", sort_key=2)

    third = await paginator.fetch_page(session, select(Item), cursor=second.next_cursor, limit=1)
    assert _ids(third) == ["a"]
    assert third.next_cursor is None
    assert not third.has_more


@pytest.mark.asyncio
async def test_equal_sort_keys_break_ties_by_id(session: AsyncSession) -> None:
    await _seed(session, ("x", 5), ("y", 5))
    paginator = KeysetPaginator("items", BY_SCORE)

    first = await paginator.fetch_page(session, select(Item), cursor=None, limit=1)
    second = await paginator.fetch_page(session, select(Item), cursor=first.next_cursor, limit=1)

    assert _ids(first) == ["y"]
    assert first.next_cursor == Cursor(id="y", sort_key=5)
    assert _ids(second) == ["x"]
    assert second.next_cursor is None


@pytest.mark.asyncio
async def test_chained_pages_visit_every_row_once(session: AsyncSession) -> None:
    rng = random.Random(7)
    rows = [(f"row-{n:02d}", rng.randint(0, 5)) for n in range(25)]
    await _seed(session, *rows)

    pages = await _drain(session, KeysetPaginator("items", BY_SCORE), limit=7)

    seen = [row_id for page in pages for row_id in _ids(page)]
    expected = [row_id for row_id, _ in sorted(rows, key=lambda r: (r[1], r[0]), reverse=True)]
    assert seen == expected
    assert len(set(seen)) == len(seen)
    assert [len(page.items) for page in pages] == [7, 7, 7, 4]
    assert all(page.has_more for page in pages[:-1])


@pytest.mark.asyncio
async def test_timestamp_cursor_travels_as_token(session: AsyncSession) -> None:
    """A string token is decoded and seeks the same way as a Cursor."""
    await _seed(session, ("a", 1), ("b", 2), ("c", 3), ("d", 4))
    paginator = KeysetPaginator("items", BY_STAMP)

    first = await paginator.fetch_page(session, select(Item), cursor=None, limit=2)
    token = CursorCodec.encode(first.next_cursor)
    second = await paginator.fetch_page(session, select(Item), cursor=token, limit=2)

    assert _ids(first) == ["d", "c"]
    assert isinstance(first.next_cursor.sort_key, datetime)
    assert _ids(second) == ["b", "a"]
    assert second.next_cursor is None


@pytest.mark.asyncio
async def test_exactly_limit_rows_is_last_page(session: AsyncSession) -> None:
    await _seed(session, ("a", 1), ("b", 2))

    page = await KeysetPaginator("items", BY_SCORE).fetch_page(
        session, select(Item), cursor=None, limit=2
    )

    assert _ids(page) == ["b", "a"]
    assert page.next_cursor is None


@pytest.mark.asyncio
async def test_empty_collection(session: AsyncSession) -> None:
    page = await KeysetPaginator("items", BY_SCORE).fetch_page(
        session, select(Item), cursor=None, limit=10
    )

    assert list(page.items) == []
    assert page.next_cursor is None


@pytest.mark.asyncio
async def test_where_predicate_filters_before_paging(session: AsyncSession) -> None:
    session.add_all(
        [
            Item(id="a", score=1, stamp=ORIGIN, kind="keep"),
            Item(id="b", score=2, stamp=ORIGIN, kind="skip"),
            Item(id="c", score=3, stamp=ORIGIN, kind="keep"),
        ]
    )
    await session.flush()

    page = await fetch_page(
        session,
        select(Item),
        order=BY_SCORE,
        where=Item.kind == "keep",
        cursor=None,
        limit=1,
        collection="items",
    )

    assert _ids(page) == ["c"]
    rest = await fetch_page(
        session,
        select(Item),
        order=BY_SCORE,
        where=Item.kind == "keep",
        cursor=page.next_cursor,
        limit=1,
    )
    assert _ids(rest) == ["a"]
    assert rest.next_cursor is None


@pytest.mark.asyncio
async def test_rows_carry_keyset_columns(session: AsyncSession) -> None:
    await _seed(session, ("a", 9))

    page = await KeysetPaginator("items", BY_SCORE).fetch_page(
        session, select(Item), cursor=None, limit=5
    )

    row = page.items[0]
    assert row.keyset_sort_key == 9
    assert row.keyset_row_id == "a"


# ──────────────────────────────────────────────────────────────
# Validation happens before the store is queried
# ──────────────────────────────────────────────────────────────


def _unused_session() -> MagicMock:
    session = MagicMock(spec=AsyncSession)
    session.execute = AsyncMock()
    return session


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [0, -1, 101])
async def test_out_of_range_limit_rejected(limit: int) -> None:
    session = _unused_session()

    with pytest.raises(ValidationException) as exc_info:
        await KeysetPaginator("items", BY_SCORE).fetch_page(
            session, select(Item), cursor=None, limit=limit
        )

    assert exc_info.value.type == "invalid-page-limit"
    assert exc_info.value.status_code == 422
    session.execute.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize("limit", [1, 100])
async def test_boundary_limits_accepted(session: AsyncSession, limit: int) -> None:
    await _seed(session, ("a", 1))

    page = await KeysetPaginator("items", BY_SCORE).fetch_page(
        session, select(Item), cursor=None, limit=limit
    )

    assert _ids(page) == ["a"]


@pytest.mark.asyncio
async def test_malformed_cursor_rejected() -> None:
    session = _unused_session()

    with pytest.raises(ValidationException) as exc_info:
        await KeysetPaginator("items", BY_SCORE).fetch_page(
            session, select(Item), cursor="not-a-cursor", limit=10
        )

    assert exc_info.value.type == "invalid-cursor"
    session.execute.assert_not_awaited()


@pytest.mark.asyncio
async def test_oversized_cursor_rejected() -> None:
    session = _unused_session()

    with pytest.raises(ValidationException) as exc_info:
        await KeysetPaginator("items", BY_SCORE).fetch_page(
            session, select(Item), cursor="W" * 100_000, limit=10
        )

    assert exc_info.value.type == "invalid-cursor"
    session.execute.assert_not_awaited()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("order", "cursor"),
    [
        (BY_STAMP, Cursor(id="c", sort_key=5)),
        (BY_SCORE, Cursor(id="c", sort_key=ORIGIN)),
    ],
    ids=["int-key-on-timestamp-order", "timestamp-key-on-int-order"],
)
async def test_cursor_of_other_key_type_gives_empty_page(
    order: KeysetOrder, cursor: Cursor
) -> None:
    session = _unused_session()

    page = await KeysetPaginator("items", order).fetch_page(
        session, select(Item), cursor=CursorCodec.encode(cursor), limit=10
    )

    assert list(page.items) == []
    assert page.next_cursor is None
    session.execute.assert_not_awaited()


def test_order_accepts_only_its_key_type():
    assert BY_STAMP.accepts(ORIGIN)
    assert not BY_STAMP.accepts(5)
    assert BY_SCORE.accepts(5)
    assert not BY_SCORE.accepts(True)
    assert not BY_SCORE.accepts(ORIGIN)


# ──────────────────────────────────────────────────────────────
# Page helpers
# ──────────────────────────────────────────────────────────────


def test_page_map_keeps_cursor():
    cursor = Cursor(id="b", sort_key=2)
    page = Page(items=[1, 2], next_cursor=cursor)

    mapped = page.map(lambda n: n * 10)

    assert list(mapped.items) == [10, 20]
    assert mapped.next_cursor is cursor


def test_page_response_encodes_cursor():
    stamp = datetime(2025, 3, 1, tzinfo=UTC)
    page = Page(items=["x"], next_cursor=Cursor(id="x", sort_key=stamp))

    response = PageResponse[str].from_page(page)

    assert response.items == ["x"]
    assert CursorCodec.decode(response.next_cursor) == Cursor(id="x", sort_key=stamp)
    assert PageResponse[str].from_page(Page(items=[])).next_cursor is None
