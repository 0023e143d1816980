"""SQLAlchemy models for the subscriptions feature."""

from __future__ import annotations

from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from video_service.core.database import ID_LENGTH, Base, TimestampMixin


class Subscription(Base, TimestampMixin):
    """A viewer following a creator. Both sides are users."""

    __tablename__ = "subscriptions"

    viewer_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    creator_id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    def __repr__(self) -> str:
        return f"<Subscription(viewer_id={self.viewer_id}, creator_id={self.creator_id})>"
