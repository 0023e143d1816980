"""Pydantic schemas for the playlists feature."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from video_service.features.videos.schemas import VideoCardResponse

if TYPE_CHECKING:
    from sqlalchemy import Row


class PlaylistCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, description="Playlist name")
    description: str | None = Field(None, max_length=5000)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            msg = "Playlist name cannot be blank"
            raise ValueError(msg)
        return v


class PlaylistResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    user_id: str
    created_at: datetime
    updated_at: datetime


class PlaylistSummaryResponse(PlaylistResponse):
    """Playlist as listed in the library, with its size and cover image."""

    video_count: int = 0
    thumbnail_url: str | None = Field(
        None,
        description="Thumbnail of the most recently added video",
    )

    @classmethod
    def from_row(cls, row: Row[Any], **extra: Any) -> PlaylistSummaryResponse:
        return cls(
            **PlaylistResponse.model_validate(row.Playlist).model_dump(),
            video_count=row.video_count,
            thumbnail_url=row.thumbnail_url,
            **extra,
        )


class PlaylistForVideoResponse(PlaylistSummaryResponse):
    contains_video: bool = False

    @classmethod
    def from_video_row(cls, row: Row[Any]) -> PlaylistForVideoResponse:
        return cls.from_row(row, contains_video=bool(row.contains_video))


class PlaylistVideoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    playlist_id: str
    video_id: str
    created_at: datetime


class HistoryVideoResponse(VideoCardResponse):
    viewed_at: datetime


class LikedVideoResponse(VideoCardResponse):
    liked_at: datetime


__all__ = [
    "HistoryVideoResponse",
    "LikedVideoResponse",
    "PlaylistCreate",
    "PlaylistForVideoResponse",
    "PlaylistResponse",
    "PlaylistSummaryResponse",
    "PlaylistVideoResponse",
]
