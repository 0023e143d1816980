"""SQLAlchemy models for the users feature."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from video_service.core.database import Base, TimestampMixin, UUIDv7PKMixin


class User(Base, UUIDv7PKMixin, TimestampMixin):
    """Local profile of an identity-provider account.

    Every other table refers to ``users.id``; ``external_id`` is only used to
    resolve the authenticated subject of a request.
    """

    __tablename__ = "users"

    external_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        comment="Identity-provider subject",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    image_url: Mapped[str] = mapped_column(Text, nullable=False, default="")

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name!r})>"
