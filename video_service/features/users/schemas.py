"""Pydantic schemas for the users feature."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """Public owner/creator fields embedded in video and subscription items."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    image_url: str


class UserProfileResponse(UserSummary):
    """Channel page header for a user."""

    created_at: datetime
    subscriber_count: int = Field(0, description="Users subscribed to this user")
    video_count: int = Field(0, description="Videos uploaded by this user")
    viewer_subscribed: bool = Field(False, description="Whether the caller subscribes to this user")


class UserSync(BaseModel):
    """Profile data supplied for the authenticated identity."""

    name: str = Field(..., min_length=1, max_length=255)
    image_url: str = Field("", max_length=2048)


__all__ = ["UserProfileResponse", "UserSummary", "UserSync"]
