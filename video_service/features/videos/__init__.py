"""Videos feature: uploads, feeds, views and reactions.

Only models and schemas are re-exported here; import the repository, service
and router from their modules.
"""

from __future__ import annotations

from .models import ReactionType, Video, VideoReaction, VideoView, Visibility
from .schemas import (
    StudioVideoResponse,
    VideoCardResponse,
    VideoDetailResponse,
    VideoResponse,
    VideoUpdate,
)

__all__ = [
    "ReactionType",
    "StudioVideoResponse",
    "Video",
    "VideoCardResponse",
    "VideoDetailResponse",
    "VideoReaction",
    "VideoResponse",
    "VideoUpdate",
    "VideoView",
    "Visibility",
]
