"""Playlists feature: user playlists, watch history and liked videos."""

from __future__ import annotations

from .models import Playlist, PlaylistVideo
from .schemas import PlaylistCreate, PlaylistResponse, PlaylistSummaryResponse

__all__ = [
    "Playlist",
    "PlaylistCreate",
    "PlaylistResponse",
    "PlaylistSummaryResponse",
    "PlaylistVideo",
]
