"""Service layer for the categories feature."""

from __future__ import annotations

from typing import TYPE_CHECKING

from video_service.core.exceptions import NotFoundException
from video_service.features.categories.repository import (
    CategoryRepository,
    get_category_repository,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.features.categories.models import Category


class CategoryService:
    def __init__(
        self,
        session: AsyncSession,
        repo: CategoryRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_category_repository()

    async def list_categories(self) -> Sequence[Category]:
        """All categories, alphabetically."""
        return await self._repo.list_by_name(self._session)

    async def ensure_exists(self, category_id: str) -> Category:
        """Get a category, failing with 404 for unknown ids."""
        category = await self._repo.get(self._session, category_id)
        if category is None:
            raise NotFoundException(
                detail=f"Category {category_id} not found",
                type="category-not-found",
                extra={"category_id": category_id},
            )
        return category


__all__ = ["CategoryService"]
