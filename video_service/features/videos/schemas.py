"""Pydantic schemas for the videos feature."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from video_service.features.users.schemas import UserSummary
from video_service.features.videos.models import ReactionType, Visibility

if TYPE_CHECKING:
    from sqlalchemy import Row


class VideoResponse(BaseModel):
    """Viewer-facing video fields."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None = None
    visibility: Visibility
    user_id: str
    category_id: str | None = None
    mux_status: str | None = None
    mux_playback_id: str | None = None
    thumbnail_url: str | None = None
    preview_url: str | None = None
    duration: int = Field(0, description="Duration in milliseconds")
    created_at: datetime
    updated_at: datetime


class StudioVideoResponse(VideoResponse):
    """Owner-facing video fields, including provider processing state."""

    mux_upload_id: str | None = None
    mux_asset_id: str | None = None
    mux_track_id: str | None = None
    mux_track_status: str | None = None
    thumbnail_key: str | None = None
    preview_key: str | None = None


class VideoCardResponse(VideoResponse):
    """Video as listed in feeds: owner plus engagement counts."""

    user: UserSummary
    view_count: int = 0
    like_count: int = 0
    dislike_count: int = 0

    @classmethod
    def from_row(cls, row: Row[Any], **extra: Any) -> VideoCardResponse:
        """Build from a ``video_card_statement`` row."""
        return cls(
            **VideoResponse.model_validate(row.Video).model_dump(),
            user=UserSummary.model_validate(row.User),
            view_count=row.view_count,
            like_count=row.like_count,
            dislike_count=row.dislike_count,
            **extra,
        )


class VideoOwnerResponse(UserSummary):
    subscriber_count: int = 0
    viewer_subscribed: bool = False


class VideoDetailResponse(VideoCardResponse):
    """Watch-page video with the caller's reaction and subscription state."""

    user: VideoOwnerResponse
    viewer_reaction: ReactionType | None = None

    @classmethod
    def from_detail_row(cls, row: Row[Any]) -> VideoDetailResponse:
        return cls(
            **VideoResponse.model_validate(row.Video).model_dump(),
            user=VideoOwnerResponse(
                **UserSummary.model_validate(row.User).model_dump(),
                subscriber_count=row.subscriber_count,
                viewer_subscribed=bool(row.viewer_subscribed),
            ),
            view_count=row.view_count,
            like_count=row.like_count,
            dislike_count=row.dislike_count,
            viewer_reaction=row.viewer_reaction,
        )


class VideoCreateResponse(BaseModel):
    video: StudioVideoResponse
    upload_url: str = Field(..., description="Direct-upload URL for the video file")


class VideoUpdate(BaseModel):
    """Owner-editable metadata. Only provided fields are changed."""

    title: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, max_length=5000)
    category_id: str | None = None
    visibility: Visibility | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str | None) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            msg = "Title cannot be blank"
            raise ValueError(msg)
        return v


class GenerateThumbnailRequest(BaseModel):
    prompt: str = Field(..., min_length=10, description="Image prompt for the thumbnail")


class WorkflowRunResponse(BaseModel):
    workflow_run_id: str


class ViewResponse(BaseModel):
    video_id: str
    viewed_at: datetime


class ReactionResponse(BaseModel):
    video_id: str
    reaction: ReactionType | None = Field(None, description="Caller's reaction after the toggle")


__all__ = [
    "GenerateThumbnailRequest",
    "ReactionResponse",
    "StudioVideoResponse",
    "VideoCardResponse",
    "VideoCreateResponse",
    "VideoDetailResponse",
    "VideoOwnerResponse",
    "VideoResponse",
    "VideoUpdate",
    "ViewResponse",
    "WorkflowRunResponse",
]
