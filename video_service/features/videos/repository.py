"""Repositories for the videos feature.

Feed queries share one row shape, built by ``video_card_statement``: the video,
its owner and the view/like/dislike counts. Each feed pages through it with
its own ``KeysetPaginator``; the sort keys are

    videos       videos.updated_at
    trending     view count (correlated count, integer cursor)
    subscribed   videos.updated_at
    studio       videos.updated_at
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from video_service.core.database import BaseRepository, CountOf, attach, build_filter, optional
from video_service.core.pagination import KeysetOrder, KeysetPaginator
from video_service.features.subscriptions.models import Subscription
from video_service.features.users.models import User
from video_service.features.users.repository import SUBSCRIBER_COUNT, viewer_subscribed
from video_service.features.videos.models import (
    ReactionType,
    Video,
    VideoReaction,
    VideoView,
    Visibility,
)

if TYPE_CHECKING:
    from sqlalchemy import Row, Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.core.pagination import Cursor, Page


VIEW_COUNT = CountOf("view_count", VideoView, VideoView.video_id == Video.id)
LIKE_COUNT = CountOf(
    "like_count",
    VideoReaction,
    VideoReaction.video_id == Video.id,
    VideoReaction.type == ReactionType.LIKE,
)
DISLIKE_COUNT = CountOf(
    "dislike_count",
    VideoReaction,
    VideoReaction.video_id == Video.id,
    VideoReaction.type == ReactionType.DISLIKE,
)

RECENT_ORDER = KeysetOrder(Video.updated_at, Video.id)
POPULAR_ORDER = KeysetOrder(VIEW_COUNT.expression(), Video.id, key_type=int)

IS_PUBLIC = Video.visibility == Visibility.PUBLIC


def video_card_statement() -> Select[Any]:
    """``select(Video, User, view_count, like_count, dislike_count)``."""
    return attach(
        select(Video, User).join(User, User.id == Video.user_id),
        VIEW_COUNT,
        LIKE_COUNT,
        DISLIKE_COUNT,
    )


class VideoRepository(BaseRepository[Video]):
    """Repository for videos and the public/owner feeds over them."""

    def __init__(self) -> None:
        super().__init__(Video)
        self._feed = KeysetPaginator("videos", RECENT_ORDER)
        self._trending = KeysetPaginator("trending", POPULAR_ORDER)
        self._subscribed = KeysetPaginator("subscribed", RECENT_ORDER)
        self._studio = KeysetPaginator("studio", RECENT_ORDER)

    async def get_owned(self, session: AsyncSession, video_id: str, user_id: str) -> Video | None:
        """Get a video only if ``user_id`` owns it."""
        return await self.find_one(session, Video.id == video_id, Video.user_id == user_id)

    async def get_detail(
        self,
        session: AsyncSession,
        video_id: str,
        *,
        viewer_id: str | None,
    ) -> Row[Any] | None:
        """Fetch the watch-page row for a video.

        Adds the owner's subscriber count, whether the viewer follows the
        owner, and the viewer's own reaction (None for anonymous viewers).
        """
        viewer_reaction = (
            select(VideoReaction.type)
            .where(VideoReaction.video_id == Video.id, VideoReaction.user_id == viewer_id)
            .correlate_except(VideoReaction)
            .scalar_subquery()
            .label("viewer_reaction")
        )
        stmt = (
            attach(video_card_statement(), SUBSCRIBER_COUNT, viewer_subscribed(viewer_id))
            .add_columns(viewer_reaction)
            .where(Video.id == video_id)
        )
        result = await session.execute(stmt)
        return result.one_or_none()

    async def list_public(
        self,
        session: AsyncSession,
        *,
        user_id: str | None = None,
        category_id: str | None = None,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        """Public videos, most recently updated first."""
        return await self._feed.fetch_page(
            session,
            video_card_statement(),
            where=build_filter(
                IS_PUBLIC,
                optional(user_id, lambda value: Video.user_id == value),
                optional(category_id, lambda value: Video.category_id == value),
            ),
            cursor=cursor,
            limit=limit,
        )

    async def list_trending(
        self,
        session: AsyncSession,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        """Public videos, most viewed first."""
        return await self._trending.fetch_page(
            session,
            video_card_statement(),
            where=IS_PUBLIC,
            cursor=cursor,
            limit=limit,
        )

    async def list_subscribed(
        self,
        session: AsyncSession,
        viewer_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        """Public videos of creators ``viewer_id`` subscribes to."""
        followed = select(Subscription.creator_id).where(Subscription.viewer_id == viewer_id)
        return await self._subscribed.fetch_page(
            session,
            video_card_statement(),
            where=build_filter(IS_PUBLIC, Video.user_id.in_(followed)),
            cursor=cursor,
            limit=limit,
        )

    async def list_owned(
        self,
        session: AsyncSession,
        user_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        """All of a user's videos, any visibility."""
        return await self._studio.fetch_page(
            session,
            select(Video),
            where=Video.user_id == user_id,
            cursor=cursor,
            limit=limit,
        )


class VideoViewRepository(BaseRepository[VideoView]):
    def __init__(self) -> None:
        super().__init__(VideoView)

    async def get_for(self, session: AsyncSession, user_id: str, video_id: str) -> VideoView | None:
        return await self.get(session, (user_id, video_id))


class VideoReactionRepository(BaseRepository[VideoReaction]):
    def __init__(self) -> None:
        super().__init__(VideoReaction)

    async def get_for(
        self,
        session: AsyncSession,
        user_id: str,
        video_id: str,
    ) -> VideoReaction | None:
        return await self.get(session, (user_id, video_id))


_video_repository: VideoRepository | None = None
_view_repository: VideoViewRepository | None = None
_reaction_repository: VideoReactionRepository | None = None


def get_video_repository() -> VideoRepository:
    """Get VideoRepository instance."""
    global _video_repository
    if _video_repository is None:
        _video_repository = VideoRepository()
    return _video_repository


def get_view_repository() -> VideoViewRepository:
    global _view_repository
    if _view_repository is None:
        _view_repository = VideoViewRepository()
    return _view_repository


def get_reaction_repository() -> VideoReactionRepository:
    global _reaction_repository
    if _reaction_repository is None:
        _reaction_repository = VideoReactionRepository()
    return _reaction_repository


__all__ = [
    "DISLIKE_COUNT",
    "IS_PUBLIC",
    "LIKE_COUNT",
    "POPULAR_ORDER",
    "RECENT_ORDER",
    "VIEW_COUNT",
    "VideoReactionRepository",
    "VideoRepository",
    "VideoViewRepository",
    "get_reaction_repository",
    "get_video_repository",
    "get_view_repository",
    "video_card_statement",
]
