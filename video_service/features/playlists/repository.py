"""Repositories for the playlists feature.

Besides user playlists this covers the two implicit ones: watch history
(ordered by when the viewer last watched) and liked videos (ordered by when
the like was given). Both are keyed on the video id, which is unique per
viewer, so it breaks sort-key ties.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import select

from video_service.core.database import BaseRepository, CountOf, Exists, attach, build_filter
from video_service.core.pagination import KeysetOrder, KeysetPaginator
from video_service.features.playlists.models import Playlist, PlaylistVideo
from video_service.features.videos.models import ReactionType, Video, VideoReaction, VideoView
from video_service.features.videos.repository import IS_PUBLIC, RECENT_ORDER, video_card_statement

if TYPE_CHECKING:
    from sqlalchemy import Row, Select
    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.core.pagination import Cursor, Page


VIDEO_COUNT = CountOf("video_count", PlaylistVideo, PlaylistVideo.playlist_id == Playlist.id)

PLAYLIST_ORDER = KeysetOrder(Playlist.updated_at, Playlist.id)


def latest_thumbnail() -> Any:
    """Thumbnail of the most recently added video of the enclosing ``Playlist``."""
    return (
        select(Video.thumbnail_url)
        .join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
        .where(PlaylistVideo.playlist_id == Playlist.id)
        .order_by(PlaylistVideo.updated_at.desc(), PlaylistVideo.video_id.desc())
        .limit(1)
        .correlate_except(Video, PlaylistVideo)
        .scalar_subquery()
        .label("thumbnail_url")
    )


def playlist_summary_statement() -> Select[Any]:
    """``select(Playlist, video_count, thumbnail_url)``."""
    return attach(select(Playlist), VIDEO_COUNT).add_columns(latest_thumbnail())


class PlaylistRepository(BaseRepository[Playlist]):
    """Repository for user playlists."""

    def __init__(self) -> None:
        super().__init__(Playlist)
        self._owned = KeysetPaginator("playlists", PLAYLIST_ORDER)
        self._for_video = KeysetPaginator("playlists_for_video", PLAYLIST_ORDER)

    async def get_owned(
        self,
        session: AsyncSession,
        playlist_id: str,
        user_id: str,
    ) -> Playlist | None:
        return await self.find_one(session, Playlist.id == playlist_id, Playlist.user_id == user_id)

    async def list_owned(
        self,
        session: AsyncSession,
        user_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._owned.fetch_page(
            session,
            playlist_summary_statement(),
            where=Playlist.user_id == user_id,
            cursor=cursor,
            limit=limit,
        )

    async def list_for_video(
        self,
        session: AsyncSession,
        user_id: str,
        video_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        """The user's playlists, each flagged with whether it holds ``video_id``."""
        contains_video = Exists(
            "contains_video",
            PlaylistVideo,
            PlaylistVideo.playlist_id == Playlist.id,
            PlaylistVideo.video_id == video_id,
        )
        return await self._for_video.fetch_page(
            session,
            attach(playlist_summary_statement(), contains_video),
            where=Playlist.user_id == user_id,
            cursor=cursor,
            limit=limit,
        )


class PlaylistVideoRepository(BaseRepository[PlaylistVideo]):
    """Repository for playlist membership."""

    def __init__(self) -> None:
        super().__init__(PlaylistVideo)
        self._contents = KeysetPaginator("playlist_videos", RECENT_ORDER)

    async def get_for(
        self,
        session: AsyncSession,
        playlist_id: str,
        video_id: str,
    ) -> PlaylistVideo | None:
        return await self.get(session, (playlist_id, video_id))

    async def list_videos(
        self,
        session: AsyncSession,
        playlist_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        """Public videos of a playlist, most recently updated first."""
        stmt = video_card_statement().join(PlaylistVideo, PlaylistVideo.video_id == Video.id)
        return await self._contents.fetch_page(
            session,
            stmt,
            where=build_filter(IS_PUBLIC, PlaylistVideo.playlist_id == playlist_id),
            cursor=cursor,
            limit=limit,
        )


class HistoryRepository(BaseRepository[VideoView]):
    """Watch history: public videos a viewer watched, most recent view first."""

    def __init__(self) -> None:
        super().__init__(VideoView)
        self._history = KeysetPaginator("history", KeysetOrder(VideoView.updated_at, Video.id))

    async def list_history(
        self,
        session: AsyncSession,
        viewer_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        stmt = (
            video_card_statement()
            .join(VideoView, VideoView.video_id == Video.id)
            .add_columns(VideoView.updated_at.label("viewed_at"))
        )
        return await self._history.fetch_page(
            session,
            stmt,
            where=build_filter(IS_PUBLIC, VideoView.user_id == viewer_id),
            cursor=cursor,
            limit=limit,
        )


class LikedRepository(BaseRepository[VideoReaction]):
    """Liked videos: public videos a viewer liked, most recent like first."""

    def __init__(self) -> None:
        super().__init__(VideoReaction)
        self._liked = KeysetPaginator("liked", KeysetOrder(VideoReaction.created_at, Video.id))

    async def list_liked(
        self,
        session: AsyncSession,
        viewer_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        stmt = (
            video_card_statement()
            .join(VideoReaction, VideoReaction.video_id == Video.id)
            .add_columns(VideoReaction.created_at.label("liked_at"))
        )
        return await self._liked.fetch_page(
            session,
            stmt,
            where=build_filter(
                IS_PUBLIC,
                VideoReaction.user_id == viewer_id,
                VideoReaction.type == ReactionType.LIKE,
            ),
            cursor=cursor,
            limit=limit,
        )


_playlist_repository: PlaylistRepository | None = None
_playlist_video_repository: PlaylistVideoRepository | None = None
_history_repository: HistoryRepository | None = None
_liked_repository: LikedRepository | None = None


def get_playlist_repository() -> PlaylistRepository:
    """Get PlaylistRepository instance."""
    global _playlist_repository
    if _playlist_repository is None:
        _playlist_repository = PlaylistRepository()
    return _playlist_repository


def get_playlist_video_repository() -> PlaylistVideoRepository:
    global _playlist_video_repository
    if _playlist_video_repository is None:
        _playlist_video_repository = PlaylistVideoRepository()
    return _playlist_video_repository


def get_history_repository() -> HistoryRepository:
    global _history_repository
    if _history_repository is None:
        _history_repository = HistoryRepository()
    return _history_repository


def get_liked_repository() -> LikedRepository:
    global _liked_repository
    if _liked_repository is None:
        _liked_repository = LikedRepository()
    return _liked_repository


__all__ = [
    "PLAYLIST_ORDER",
    "VIDEO_COUNT",
    "HistoryRepository",
    "LikedRepository",
    "PlaylistRepository",
    "PlaylistVideoRepository",
    "get_history_repository",
    "get_liked_repository",
    "get_playlist_repository",
    "get_playlist_video_repository",
    "latest_thumbnail",
    "playlist_summary_statement",
]
