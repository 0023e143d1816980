"""Pytest configuration and shared fixtures.

Organization:
    - Database Fixtures: in-memory SQLite engine and session with all tables
    - Provider Fixtures: mocked media, file-storage and workflow clients
    - Application Fixtures: FastAPI app wired to the test session, HTTP client
    - Data Factories: users, categories and videos
"""

from __future__ import annotations

import os
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from fastapi import FastAPI
    from sqlalchemy.ext.asyncio import AsyncEngine

    from video_service.features.categories.models import Category
    from video_service.features.users.models import User
    from video_service.features.videos.models import Video

# Ensure tests run without external infrastructure
os.environ.setdefault("DB_ENABLED", "false")
os.environ.setdefault("DB_CREATE_TABLES", "false")
os.environ.setdefault("APP_ENVIRONMENT", "test")
os.environ.setdefault("LOG_JSON_FORMAT", "false")
os.environ.setdefault("LOG_CONSOLE_ENABLED", "false")

SUBJECT_HEADER = "X-Auth-Subject"
ORIGIN = datetime(2025, 1, 1, tzinfo=UTC)


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    """Async engine on a single shared in-memory SQLite connection.

    Foreign keys are enforced so ``ON DELETE CASCADE`` behaves like PostgreSQL.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    @event.listens_for(engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
        _ = connection_record
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def db_session(db_engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session with every feature table created, dropped again after the test."""
    # Registers every feature model on Base.metadata
    import video_service.features.categories
    import video_service.features.playlists
    import video_service.features.subscriptions
    import video_service.features.users
    import video_service.features.videos  # noqa: F401
    from video_service.core.database import Base

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )

    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)


# ============================================================================
# Provider Fixtures
# ============================================================================


@pytest.fixture
def media_client() -> MagicMock:
    """Media-processing client double; async methods are AsyncMocks."""
    from video_service.infra.external import DirectUpload, MediaProcessingClient

    client = MagicMock(spec=MediaProcessingClient)
    client.create_upload.return_value = DirectUpload(
        id="upload-1",
        url="https://storage.test/upload-1",
        status="waiting",
    )
    client.thumbnail_url.side_effect = lambda playback_id: (
        f"https://image.test/{playback_id}/thumbnail.jpg"
    )
    client.preview_url.side_effect = lambda playback_id: (
        f"https://image.test/{playback_id}/animated.gif"
    )
    return client


@pytest.fixture
def storage_client() -> MagicMock:
    from video_service.infra.external import FileStorageClient

    client = MagicMock(spec=FileStorageClient)
    client.delete_files.return_value = 1
    return client


@pytest.fixture
def workflow_client() -> MagicMock:
    from video_service.infra.external import WorkflowClient, WorkflowRun

    client = MagicMock(spec=WorkflowClient)
    client.trigger.return_value = WorkflowRun(workflow_run_id="wfr_test", message_id="msg_1")
    return client


# ============================================================================
# Application Fixtures
# ============================================================================


@pytest.fixture
async def app(
    db_session: AsyncSession,
    media_client: MagicMock,
    storage_client: MagicMock,
    workflow_client: MagicMock,
) -> FastAPI:
    """FastAPI application bound to the test session and provider doubles.

    Routes commit on the shared test session, so data created through the API
    is visible to the test afterwards.
    """
    from video_service.app.main import create_app
    from video_service.core.dependencies import (
        get_db_session,
        get_media_client,
        get_storage_client,
        get_workflow_client,
    )

    application = create_app()

    async def _session_override() -> AsyncGenerator[AsyncSession]:
        yield db_session

    application.dependency_overrides[get_db_session] = _session_override
    application.dependency_overrides[get_media_client] = lambda: media_client
    application.dependency_overrides[get_storage_client] = lambda: storage_client
    application.dependency_overrides[get_workflow_client] = lambda: workflow_client
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Async HTTP client talking to the app in-process."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def auth_headers() -> Callable[[User], dict[str, str]]:
    """Headers the identity gateway would forward for a user."""

    def _headers(user: User) -> dict[str, str]:
        return {SUBJECT_HEADER: user.external_id}

    return _headers


# ============================================================================
# Data Factories
# ============================================================================


@pytest.fixture
def create_user(db_session: AsyncSession) -> Callable[..., Awaitable[User]]:
    """Factory for persisted users.

    Example:
        async def test_profile(create_user):
            alice = await create_user("Alice")
    """
    from video_service.features.users.models import User

    counter = {"n": 0}

    async def _create(name: str = "Test User", *, external_id: str | None = None) -> User:
        counter["n"] += 1
        user = User(
            external_id=external_id or f"sub_{name.lower().replace(' ', '_')}_{counter['n']}",
            name=name,
            image_url=f"https://avatars.test/{counter['n']}.png",
        )
        db_session.add(user)
        await db_session.flush()
        return user

    return _create


@pytest.fixture
def create_category(db_session: AsyncSession) -> Callable[..., Awaitable[Category]]:
    from video_service.features.categories.models import Category

    async def _create(name: str, description: str | None = None) -> Category:
        category = Category(name=name, description=description)
        db_session.add(category)
        await db_session.flush()
        return category

    return _create


@pytest.fixture
def create_video(db_session: AsyncSession) -> Callable[..., Awaitable[Video]]:
    """Factory for persisted videos; public by default with a fixed ``updated_at``."""
    from video_service.features.videos.models import Video, Visibility

    async def _create(
        owner: User,
        title: str = "Video",
        *,
        visibility: Visibility = Visibility.PUBLIC,
        updated_at: datetime | None = None,
        category_id: str | None = None,
        **fields: Any,
    ) -> Video:
        stamp = updated_at or ORIGIN
        video = Video(
            title=title,
            user_id=owner.id,
            visibility=visibility,
            category_id=category_id,
            created_at=stamp,
            updated_at=stamp,
            **fields,
        )
        db_session.add(video)
        await db_session.flush()
        return video

    return _create


@pytest.fixture
def at() -> Callable[[int], datetime]:
    """``at(n)``: a timestamp ``n`` minutes after a fixed origin."""

    def _at(minutes: int) -> datetime:
        return ORIGIN + timedelta(minutes=minutes)

    return _at
