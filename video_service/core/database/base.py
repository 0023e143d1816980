"""Declarative base and composable mixins for the video service models.

Examples:
    Model with a time-sortable string id and timestamps:
    class Playlist(Base, UUIDv7PKMixin, TimestampMixin):
        __tablename__ = "playlists"
        name: Mapped[str] = mapped_column(String(100))

    Association model keyed by its foreign keys:
    class VideoView(Base, TimestampMixin):
        __tablename__ = "video_views"
        user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), primary_key=True)
        video_id: Mapped[str] = mapped_column(ForeignKey("videos.id"), primary_key=True)
"""

from __future__ import annotations

import os
import time
import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.orm import DeclarativeBase, Mapped, declared_attr, mapped_column
from sqlalchemy.sql import func

# Consistent naming convention for database constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

ID_LENGTH = 36


class Base(DeclarativeBase):
    """Declarative base with constraint naming and automatic table naming.

    The automatic table name is the lowercase class name; every model in this
    service sets ``__tablename__`` explicitly.
    """

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    @declared_attr.directive
    def __tablename__(cls) -> str:
        return cls.__name__.lower()


def generate_uuid7() -> str:
    """Generate a UUID v7 string.

    UUID v7 puts the millisecond timestamp in the leading 48 bits, so ids
    generated later compare greater as plain strings. Keyset pages use the id
    as a tie-breaker, which keeps same-timestamp rows in creation order.
    """
    timestamp_ms = int(time.time() * 1000)
    random_bytes = os.urandom(10)

    uuid_bytes = bytearray(16)
    uuid_bytes[0:6] = timestamp_ms.to_bytes(6, byteorder="big")
    uuid_bytes[6] = (random_bytes[0] & 0x0F) | 0x70  # Version 7
    uuid_bytes[7] = random_bytes[1]
    uuid_bytes[8] = (random_bytes[2] & 0x3F) | 0x80  # Variant
    uuid_bytes[9:16] = random_bytes[3:10]

    return str(uuid.UUID(bytes=bytes(uuid_bytes)))


class UUIDv7PKMixin:
    """Opaque string primary key holding a UUID v7.

    Provides:
        id: String primary key, time-sortable when generated here
    """

    __allow_unmapped__ = True

    id: Mapped[str] = mapped_column(
        String(ID_LENGTH),
        primary_key=True,
        default=generate_uuid7,
        comment="UUID v7 primary key (time-sortable)",
    )


class TimestampMixin:
    """Timestamp tracking for create and update operations.

    Provides:
        created_at: Timestamp of record creation (immutable)
        updated_at: Timestamp of last modification (auto-updates)
    """

    __allow_unmapped__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        nullable=False,
        comment="Timestamp of record creation",
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        server_default=func.now(),
        onupdate=lambda: datetime.now(UTC),
        nullable=False,
        comment="Timestamp of last update",
    )


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


__all__ = [
    "ID_LENGTH",
    "NAMING_CONVENTION",
    "Base",
    "TimestampMixin",
    "UUIDv7PKMixin",
    "generate_uuid7",
    "utcnow",
]
