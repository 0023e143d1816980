"""SQLAlchemy models for the playlists feature."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from video_service.core.database import ID_LENGTH, Base, TimestampMixin, UUIDv7PKMixin


class Playlist(Base, UUIDv7PKMixin, TimestampMixin):
    """User-curated, owner-private list of videos."""

    __tablename__ = "playlists"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Playlist(id={self.id}, name={self.name!r})>"


class PlaylistVideo(Base, TimestampMixin):
    """Membership of a video in a playlist; ``created_at`` is when it was added."""

    __tablename__ = "playlist_videos"

    playlist_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("playlists.id", ondelete="CASCADE"),
        primary_key=True,
    )
    video_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("videos.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
