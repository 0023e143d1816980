"""Minimal generic repository for SQLAlchemy models.

Provides basic CRUD operations with explicit session passing. Feature
repositories add their own queries on top; list queries go through the keyset
paginator.

Example:
    class CategoryRepository(BaseRepository[Category]):
        async def list_by_name(self, session: AsyncSession) -> Sequence[Category]:
            result = await session.execute(select(Category).order_by(Category.name))
            return result.scalars().all()

    repo = CategoryRepository(Category)
    category = await repo.get_or_raise(session, category_id)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Generic, TypeVar, cast

from sqlalchemy import inspect as sa_inspect
from sqlalchemy import select

from video_service.core.database.exceptions import NotFoundError
from video_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession
    from sqlalchemy.orm import InstrumentedAttribute

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """Minimal generic repository for CRUD operations.

    Provides:
        - get(session, id) -> T | None
        - get_or_raise(session, id) -> T (raises NotFoundError)
        - get_by(session, attr, value) -> T | None
        - find_one(session, *criteria) -> T | None
        - create(session, instance) -> T
        - delete(session, instance) -> None

    Session is always explicit - no hidden state.
    """

    __slots__ = ("_lazy", "_logger", "model")

    def __init__(self, model: type[T]) -> None:
        self.model = model
        self._logger = logging.getLogger(f"repository.{model.__name__}")
        self._lazy = get_lazy_logger(f"repository.{model.__name__}")

    async def get(self, session: AsyncSession, id: Any) -> T | None:  # noqa: A002
        """Get entity by primary key.

        ``id`` may be a tuple for composite keys, in mapper column order.
        """
        instance = await session.get(self.model, id)
        self._lazy.debug(
            lambda: f"db.get: {self.model.__name__}({id}) -> {'found' if instance else 'not found'}"
        )
        return instance

    async def get_or_raise(self, session: AsyncSession, id: Any) -> T:  # noqa: A002
        """Get entity by primary key or raise NotFoundError."""
        instance = await self.get(session, id)
        if instance is None:
            self._logger.info(
                "Entity not found",
                extra={
                    "entity": self.model.__name__,
                    "id": str(id),
                    "operation": "db.get_or_raise",
                },
            )
            raise NotFoundError(self.model.__name__, {"id": id})
        return instance

    async def get_by(
        self,
        session: AsyncSession,
        attr: InstrumentedAttribute[Any],
        value: Any,
    ) -> T | None:
        """Get entity by a unique attribute.

        Example:
            user = await repo.get_by(session, User.external_id, "user_2abc")
        """
        result = await session.execute(select(self.model).where(attr == value))
        instance = result.scalar_one_or_none()

        self._lazy.debug(
            lambda: f"db.get_by: {self.model.__name__}.{attr.key}={value!r} -> {'found' if instance else 'not found'}"
        )
        return instance

    async def find_one(self, session: AsyncSession, *criteria: Any) -> T | None:
        """Return the first entity matching all criteria, or None."""
        result = await session.execute(select(self.model).where(*criteria).limit(1))
        return result.scalars().first()

    async def create(self, session: AsyncSession, instance: T) -> T:
        """Persist a new entity.

        Adds to session, flushes to get generated values and refreshes.
        """
        session.add(instance)
        await session.flush()
        await session.refresh(instance)

        self._lazy.debug(lambda: f"db.create: {self.model.__name__}({self._identity(instance)})")
        return instance

    async def delete(self, session: AsyncSession, instance: T) -> None:
        """Delete an entity."""
        identity = self._identity(instance)
        await session.delete(instance)
        await session.flush()

        self._logger.info(
            "Entity deleted",
            extra={"entity": self.model.__name__, "id": identity, "operation": "db.delete"},
        )

    @staticmethod
    def _identity(instance: Any) -> str:
        state = sa_inspect(instance)
        key = state.identity
        if key is None:
            return "transient"
        return ",".join(str(part) for part in cast("tuple[Any, ...]", key))


__all__ = ["BaseRepository"]
