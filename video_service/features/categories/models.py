"""SQLAlchemy models for the categories feature."""

from __future__ import annotations

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from video_service.core.database import Base, TimestampMixin, UUIDv7PKMixin


class Category(Base, UUIDv7PKMixin, TimestampMixin):
    """Video category (e.g. "Music", "Gaming")."""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name={self.name!r})>"
