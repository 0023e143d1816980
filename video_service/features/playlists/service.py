"""Service layer for the playlists feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from video_service.core.exceptions import ConflictException, NotFoundException
from video_service.features.playlists.models import Playlist, PlaylistVideo
from video_service.features.playlists.repository import (
    HistoryRepository,
    LikedRepository,
    PlaylistRepository,
    PlaylistVideoRepository,
    get_history_repository,
    get_liked_repository,
    get_playlist_repository,
    get_playlist_video_repository,
)
from video_service.features.videos.service import VideoService

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.core.pagination import Cursor, Page
    from video_service.features.playlists.schemas import PlaylistCreate

logger = logging.getLogger(__name__)


class PlaylistService:
    """Service for playlists, watch history and liked videos.

    Playlists are private to their owner: any access to a playlist the caller
    does not own is reported as not found.
    """

    def __init__(
        self,
        session: AsyncSession,
        repo: PlaylistRepository | None = None,
        members: PlaylistVideoRepository | None = None,
        history: HistoryRepository | None = None,
        liked: LikedRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_playlist_repository()
        self._members = members or get_playlist_video_repository()
        self._history = history or get_history_repository()
        self._liked = liked or get_liked_repository()

    async def create_playlist(self, user_id: str, payload: PlaylistCreate) -> Playlist:
        playlist = await self._repo.create(
            self._session,
            Playlist(name=payload.name, description=payload.description, user_id=user_id),
        )
        logger.info("Playlist created", extra={"playlist_id": playlist.id, "user_id": user_id})
        return playlist

    async def get_owned(self, playlist_id: str, user_id: str) -> Playlist:
        """Get a playlist owned by ``user_id``.

        Raises:
            NotFoundException: If the playlist does not exist or is not owned by the user
        """
        playlist = await self._repo.get_owned(self._session, playlist_id, user_id)
        if playlist is None:
            raise NotFoundException(
                detail=f"Playlist {playlist_id} not found",
                type="playlist-not-found",
                extra={"playlist_id": playlist_id},
            )
        return playlist

    async def remove_playlist(self, playlist_id: str, user_id: str) -> Playlist:
        playlist = await self.get_owned(playlist_id, user_id)
        await self._repo.delete(self._session, playlist)
        return playlist

    async def list_playlists(
        self,
        user_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._repo.list_owned(self._session, user_id, cursor=cursor, limit=limit)

    async def list_for_video(
        self,
        user_id: str,
        video_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._repo.list_for_video(
            self._session, user_id, video_id, cursor=cursor, limit=limit
        )

    async def list_videos(
        self,
        playlist_id: str,
        user_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        """Videos of an owned playlist.

        Raises:
            NotFoundException: If the playlist is not owned by the user
        """
        await self.get_owned(playlist_id, user_id)
        return await self._members.list_videos(
            self._session, playlist_id, cursor=cursor, limit=limit
        )

    async def add_video(self, playlist_id: str, video_id: str, user_id: str) -> PlaylistVideo:
        """Add a video to an owned playlist.

        Raises:
            NotFoundException: If the playlist is not owned or the video does not exist
            ConflictException: If the video is already in the playlist
        """
        await self.get_owned(playlist_id, user_id)
        await VideoService(self._session).ensure_exists(video_id)

        if await self._members.get_for(self._session, playlist_id, video_id) is not None:
            raise ConflictException(
                detail="Video is already in the playlist",
                type="playlist-video-exists",
                extra={"playlist_id": playlist_id, "video_id": video_id},
            )

        member = await self._members.create(
            self._session,
            PlaylistVideo(playlist_id=playlist_id, video_id=video_id),
        )
        logger.info(
            "Video added to playlist",
            extra={"playlist_id": playlist_id, "video_id": video_id},
        )
        return member

    async def remove_video(self, playlist_id: str, video_id: str, user_id: str) -> PlaylistVideo:
        """Remove a video from an owned playlist.

        Raises:
            NotFoundException: If the playlist is not owned, the video does not
                exist, or the video is not in the playlist
        """
        await self.get_owned(playlist_id, user_id)
        await VideoService(self._session).ensure_exists(video_id)

        member = await self._members.get_for(self._session, playlist_id, video_id)
        if member is None:
            raise NotFoundException(
                detail="Video is not in the playlist",
                type="playlist-video-not-found",
                extra={"playlist_id": playlist_id, "video_id": video_id},
            )
        await self._members.delete(self._session, member)
        return member

    async def list_history(
        self,
        viewer_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._history.list_history(
            self._session, viewer_id, cursor=cursor, limit=limit
        )

    async def list_liked(
        self,
        viewer_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._liked.list_liked(self._session, viewer_id, cursor=cursor, limit=limit)


__all__ = ["PlaylistService"]
