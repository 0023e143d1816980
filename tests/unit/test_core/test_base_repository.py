"""Unit tests for the generic repository."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from video_service.core.database import BaseRepository, NotFoundError
from video_service.features.categories.models import Category

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession


@pytest.fixture
def repo() -> BaseRepository[Category]:
    return BaseRepository(Category)


@pytest.mark.asyncio
async def test_create_assigns_time_sortable_id(db_session: AsyncSession, repo) -> None:
    first = await repo.create(db_session, Category(name="Music"))
    second = await repo.create(db_session, Category(name="Gaming"))

    # Leading 48 bits are the millisecond timestamp.
    assert first.id[:13] <= second.id[:13]
    assert first.id != second.id
    assert first.created_at is not None


@pytest.mark.asyncio
async def test_lookups(db_session: AsyncSession, repo) -> None:
    music = await repo.create(db_session, Category(name="Music"))

    assert await repo.get(db_session, music.id) is music
    assert await repo.get_by(db_session, Category.name, "Music") is music
    assert await repo.find_one(db_session, Category.name == "Sports") is None


@pytest.mark.asyncio
async def test_get_or_raise(db_session: AsyncSession, repo) -> None:
    with pytest.raises(NotFoundError) as exc_info:
        await repo.get_or_raise(db_session, "missing")

    assert exc_info.value.model_name == "Category"


@pytest.mark.asyncio
async def test_delete(db_session: AsyncSession, repo) -> None:
    music = await repo.create(db_session, Category(name="Music"))
    music_id = music.id

    await repo.delete(db_session, music)

    assert await repo.get(db_session, music_id) is None
