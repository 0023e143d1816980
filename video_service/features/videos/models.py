"""SQLAlchemy models for the videos feature.

``Video`` mirrors the state of its asset at the media-processing provider
(``mux_*`` columns) next to the owner-editable metadata. Views and reactions
are keyed by (user, video), so each viewer has at most one of each per video.
"""

from __future__ import annotations

from enum import StrEnum

from sqlalchemy import Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from video_service.core.database import ID_LENGTH, Base, TimestampMixin, UUIDv7PKMixin


class Visibility(StrEnum):
    PUBLIC = "public"
    PRIVATE = "private"


class ReactionType(StrEnum):
    LIKE = "like"
    DISLIKE = "dislike"


def _enum_values(enum_cls: type[StrEnum]) -> list[str]:
    return [member.value for member in enum_cls]


class Video(Base, UUIDv7PKMixin, TimestampMixin):
    """An uploaded video and its provider-side processing state."""

    __tablename__ = "videos"

    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    visibility: Mapped[Visibility] = mapped_column(
        Enum(Visibility, name="video_visibility", values_callable=_enum_values),
        nullable=False,
        default=Visibility.PRIVATE,
    )
    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    category_id: Mapped[str | None] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Media-processing provider state
    mux_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    mux_upload_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    mux_asset_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    mux_playback_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    mux_track_id: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    mux_track_status: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # Thumbnail/preview, either provider-generated or uploaded (then *_key is set)
    thumbnail_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    thumbnail_key: Mapped[str | None] = mapped_column(String(255), nullable=True)
    preview_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    preview_key: Mapped[str | None] = mapped_column(String(255), nullable=True)

    duration: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        comment="Duration in milliseconds",
    )

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, title={self.title!r}, visibility={self.visibility})>"


class VideoView(Base, TimestampMixin):
    """Latest view of a video by a user; ``updated_at`` is the viewed-at time."""

    __tablename__ = "video_views"

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    video_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("videos.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )


class VideoReaction(Base, TimestampMixin):
    """Like or dislike of a video by a user."""

    __tablename__ = "video_reactions"

    user_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    video_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("videos.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )
    type: Mapped[ReactionType] = mapped_column(
        Enum(ReactionType, name="reaction_type", values_callable=_enum_values),
        nullable=False,
    )
