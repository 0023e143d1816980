"""Service layer for the videos feature.

Owner operations resolve the video with ``Video.user_id == user_id`` and
report a foreign video exactly like a missing one (404). Provider clients are
passed to the operations that need them, so read paths never touch them.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from video_service.core.database import utcnow
from video_service.core.exceptions import (
    BadRequestException,
    ExternalServiceException,
    NotFoundException,
)
from video_service.features.categories.service import CategoryService
from video_service.features.videos.models import (
    ReactionType,
    Video,
    VideoReaction,
    VideoView,
)
from video_service.features.videos.repository import (
    VideoReactionRepository,
    VideoRepository,
    VideoViewRepository,
    get_reaction_repository,
    get_video_repository,
    get_view_repository,
)
from video_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from sqlalchemy import Row
    from sqlalchemy.ext.asyncio import AsyncSession

    from video_service.core.pagination import Cursor, Page
    from video_service.features.videos.schemas import VideoUpdate
    from video_service.infra.external import (
        DirectUpload,
        FileStorageClient,
        MediaProcessingClient,
        WorkflowClient,
        WorkflowRun,
    )

logger = logging.getLogger(__name__)
lazy_logger = get_lazy_logger(__name__)

UNTITLED = "Untitled"
WAITING_STATUS = "waiting"


class VideoService:
    """Service for videos, their feeds, views and reactions.

    Handles business logic for:
    - Public, trending, subscribed and studio feeds
    - Upload creation and provider state refresh
    - Metadata updates and removal
    - View recording and like/dislike toggling
    - AI generation workflow triggers
    """

    def __init__(
        self,
        session: AsyncSession,
        repo: VideoRepository | None = None,
        views: VideoViewRepository | None = None,
        reactions: VideoReactionRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_video_repository()
        self._views = views or get_view_repository()
        self._reactions = reactions or get_reaction_repository()

    # ──────────────────────────────────────────────────────────────
    # Reads
    # ──────────────────────────────────────────────────────────────

    async def list_public(
        self,
        *,
        user_id: str | None = None,
        category_id: str | None = None,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._repo.list_public(
            self._session,
            user_id=user_id,
            category_id=category_id,
            cursor=cursor,
            limit=limit,
        )

    async def list_trending(
        self,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._repo.list_trending(self._session, cursor=cursor, limit=limit)

    async def list_subscribed(
        self,
        viewer_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._repo.list_subscribed(
            self._session, viewer_id, cursor=cursor, limit=limit
        )

    async def list_studio(
        self,
        user_id: str,
        *,
        cursor: Cursor | str | None = None,
        limit: int,
    ) -> Page[Row[Any]]:
        return await self._repo.list_owned(self._session, user_id, cursor=cursor, limit=limit)

    async def get_detail(self, video_id: str, *, viewer_id: str | None) -> Row[Any]:
        """Get the watch-page row for a video.

        Raises:
            NotFoundException: If the video does not exist
        """
        row = await self._repo.get_detail(self._session, video_id, viewer_id=viewer_id)
        if row is None:
            raise self._not_found(video_id)
        return row

    async def get_owned(self, video_id: str, user_id: str) -> Video:
        """Get a video owned by ``user_id``.

        Raises:
            NotFoundException: If the video does not exist or is not owned by the user
        """
        video = await self._repo.get_owned(self._session, video_id, user_id)
        if video is None:
            raise self._not_found(video_id)
        return video

    async def ensure_exists(self, video_id: str) -> Video:
        video = await self._repo.get(self._session, video_id)
        if video is None:
            raise self._not_found(video_id)
        return video

    # ──────────────────────────────────────────────────────────────
    # Owner lifecycle
    # ──────────────────────────────────────────────────────────────

    async def create_video(
        self,
        user_id: str,
        *,
        media: MediaProcessingClient,
    ) -> tuple[Video, DirectUpload]:
        """Open a direct upload at the media provider and record the pending video."""
        upload = await media.create_upload(passthrough=user_id)
        video = await self._repo.create(
            self._session,
            Video(
                title=UNTITLED,
                user_id=user_id,
                mux_status=WAITING_STATUS,
                mux_upload_id=upload.id,
            ),
        )
        logger.info(
            "Video created",
            extra={"video_id": video.id, "user_id": user_id, "upload_id": upload.id},
        )
        return video, upload

    async def update_video(self, video_id: str, user_id: str, payload: VideoUpdate) -> Video:
        """Apply the provided metadata fields to an owned video.

        Raises:
            NotFoundException: If the video is not owned or the category does not exist
        """
        video = await self.get_owned(video_id, user_id)
        changes = payload.model_dump(exclude_unset=True)

        if changes.get("category_id") is not None:
            await CategoryService(self._session).ensure_exists(changes["category_id"])

        for field, value in changes.items():
            if value is None and field in {"title", "visibility"}:
                continue
            setattr(video, field, value)

        await self._session.flush()
        await self._session.refresh(video)
        logger.info(
            "Video updated",
            extra={"video_id": video.id, "fields": sorted(changes)},
        )
        return video

    async def remove_video(
        self,
        video_id: str,
        user_id: str,
        *,
        media: MediaProcessingClient,
        storage: FileStorageClient,
    ) -> Video:
        """Delete an owned video.

        Provider clean-up (custom thumbnail file, media asset) is best effort:
        failures are logged and the row is deleted regardless.
        """
        video = await self.get_owned(video_id, user_id)

        if video.thumbnail_key:
            try:
                await storage.delete_files(video.thumbnail_key)
            except ExternalServiceException as e:
                logger.warning(
                    "Failed to delete thumbnail file, continuing with removal",
                    extra={"video_id": video.id, "file_key": video.thumbnail_key, "error": e.detail},
                )

        if video.mux_asset_id:
            try:
                await media.delete_asset(video.mux_asset_id)
            except ExternalServiceException as e:
                logger.warning(
                    "Failed to delete media asset, continuing with removal",
                    extra={"video_id": video.id, "asset_id": video.mux_asset_id, "error": e.detail},
                )

        await self._repo.delete(self._session, video)
        return video

    async def revalidate(
        self,
        video_id: str,
        user_id: str,
        *,
        media: MediaProcessingClient,
    ) -> Video:
        """Refresh asset id, status, playback id and duration from the media provider.

        Once the asset has a playback id, provider-derived thumbnail and preview
        URLs are filled in unless a custom file was uploaded for them.

        Raises:
            BadRequestException: If the video has no upload, or the upload has no asset yet
        """
        video = await self.get_owned(video_id, user_id)
        if not video.mux_upload_id:
            raise BadRequestException(
                detail="Video has no upload to revalidate",
                type="video-upload-missing",
                extra={"video_id": video.id},
            )

        upload = await media.get_upload(video.mux_upload_id)
        if not upload.asset_id:
            raise BadRequestException(
                detail="Upload has not produced an asset yet",
                type="video-asset-missing",
                extra={"video_id": video.id, "upload_id": upload.id},
            )

        asset = await media.get_asset(upload.asset_id)
        video.mux_asset_id = asset.id
        video.mux_status = asset.status
        video.mux_playback_id = asset.playback_id
        video.duration = asset.duration_ms
        if asset.playback_id:
            if not video.thumbnail_key:
                video.thumbnail_url = media.thumbnail_url(asset.playback_id)
            if not video.preview_key:
                video.preview_url = media.preview_url(asset.playback_id)
        await self._session.flush()
        await self._session.refresh(video)

        logger.info(
            "Video revalidated",
            extra={"video_id": video.id, "asset_id": asset.id, "status": asset.status},
        )
        return video

    async def restore_thumbnail(
        self,
        video_id: str,
        user_id: str,
        *,
        media: MediaProcessingClient,
        storage: FileStorageClient,
    ) -> Video:
        """Drop a custom thumbnail and point back at the provider-generated one.

        Raises:
            BadRequestException: If the video has no playback id to derive a thumbnail from
        """
        video = await self.get_owned(video_id, user_id)
        if not video.mux_playback_id:
            raise BadRequestException(
                detail="Video has no playback id",
                type="video-playback-missing",
                extra={"video_id": video.id},
            )

        if video.thumbnail_key:
            await storage.delete_files(video.thumbnail_key)
            video.thumbnail_key = None

        video.thumbnail_url = media.thumbnail_url(video.mux_playback_id)
        await self._session.flush()
        await self._session.refresh(video)
        lazy_logger.debug(lambda: f"video.restore_thumbnail: {video.id} -> {video.thumbnail_url}")
        return video

    async def trigger_generation(
        self,
        video_id: str,
        user_id: str,
        kind: str,
        *,
        workflows: WorkflowClient,
        prompt: str | None = None,
    ) -> WorkflowRun:
        """Start an AI generation workflow (``title``, ``description`` or ``thumbnail``)."""
        video = await self.get_owned(video_id, user_id)
        body: dict[str, Any] = {"userId": user_id, "videoId": video.id}
        if prompt is not None:
            body["prompt"] = prompt
        return await workflows.trigger(kind, body)

    # ──────────────────────────────────────────────────────────────
    # Views and reactions
    # ──────────────────────────────────────────────────────────────

    async def record_view(self, video_id: str, viewer_id: str) -> VideoView:
        """Record that ``viewer_id`` watched the video; a repeat view refreshes ``viewed_at``."""
        await self.ensure_exists(video_id)
        view = await self._views.get_for(self._session, viewer_id, video_id)
        if view is None:
            return await self._views.create(
                self._session,
                VideoView(user_id=viewer_id, video_id=video_id),
            )

        view.updated_at = utcnow()
        await self._session.flush()
        lazy_logger.debug(lambda: f"video.view: refreshed {viewer_id} -> {video_id}")
        return view

    async def toggle_reaction(
        self,
        video_id: str,
        viewer_id: str,
        reaction_type: ReactionType,
    ) -> ReactionType | None:
        """Set the viewer's reaction; reacting the same way twice removes it.

        Returns:
            The viewer's reaction after the toggle, or None when it was removed.
        """
        await self.ensure_exists(video_id)
        reaction = await self._reactions.get_for(self._session, viewer_id, video_id)

        if reaction is None:
            await self._reactions.create(
                self._session,
                VideoReaction(user_id=viewer_id, video_id=video_id, type=reaction_type),
            )
            return reaction_type

        if reaction.type == reaction_type:
            await self._reactions.delete(self._session, reaction)
            return None

        # liked_at is the reaction's created_at, so it restarts on a flip
        reaction.type = reaction_type
        reaction.created_at = utcnow()
        await self._session.flush()
        return reaction_type

    @staticmethod
    def _not_found(video_id: str) -> NotFoundException:
        return NotFoundException(
            detail=f"Video {video_id} not found",
            type="video-not-found",
            extra={"video_id": video_id},
        )


__all__ = ["UNTITLED", "WAITING_STATUS", "VideoService"]
