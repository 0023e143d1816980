"""Database session dependency for FastAPI routes.

Each request gets its own ``AsyncSession`` from the shared session factory.
Route handlers own the transaction boundary: write endpoints call
``await session.commit()`` once the service call succeeded, and the session
context manager rolls back on any exception.

Usage:
    from typing import Annotated

    from fastapi import Depends
    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.core.dependencies.database import get_db_session

    @router.post("/playlists")
    async def create_playlist(
        payload: PlaylistCreate,
        session: Annotated[AsyncSession, Depends(get_db_session)],
    ):
        playlist = await PlaylistService(session).create(...)
        await session.commit()
        return playlist

Tests override this dependency with a session bound to an in-memory database:

    app.dependency_overrides[get_db_session] = lambda: test_session
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from video_service.infra.database.session import get_async_session

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from sqlalchemy.ext.asyncio import AsyncSession


async def get_db_session() -> AsyncGenerator[AsyncSession]:
    """Yield a database session scoped to the current request."""
    async with get_async_session() as session:
        yield session


__all__ = ["get_db_session"]
