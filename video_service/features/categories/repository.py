"""Repository for the categories feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import select

from video_service.core.database import BaseRepository
from video_service.features.categories.models import Category

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession


class CategoryRepository(BaseRepository[Category]):
    def __init__(self) -> None:
        super().__init__(Category)

    async def list_by_name(self, session: AsyncSession) -> Sequence[Category]:
        result = await session.execute(select(Category).order_by(Category.name))
        return result.scalars().all()


_category_repository: CategoryRepository | None = None


def get_category_repository() -> CategoryRepository:
    """Get CategoryRepository instance."""
    global _category_repository
    if _category_repository is None:
        _category_repository = CategoryRepository()
    return _category_repository


__all__ = ["CategoryRepository", "get_category_repository"]
