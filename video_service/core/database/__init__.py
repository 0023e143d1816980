"""Core database package: declarative base, mixins, repository and query helpers.

Base Classes and Mixins:
    - Base: Declarative base with constraint naming convention
    - UUIDv7PKMixin: Time-sortable string primary key
    - TimestampMixin: created_at, updated_at tracking

Repository:
    - BaseRepository[T]: Generic CRUD with explicit session passing

Query Helpers:
    - StatementFilter: Base class for statement filters
    - build_filter / optional: Fold optional predicates into one conjunction
    - CountOf / Exists / attach: Declarative correlated aggregates

Exceptions:
    - RepositoryError, NotFoundError
"""

from video_service.core.database.aggregates import CountOf, Exists, attach
from video_service.core.database.base import (
    ID_LENGTH,
    NAMING_CONVENTION,
    Base,
    TimestampMixin,
    UUIDv7PKMixin,
    generate_uuid7,
    utcnow,
)
from video_service.core.database.exceptions import NotFoundError, RepositoryError
from video_service.core.database.filters import StatementFilter, build_filter, optional
from video_service.core.database.repository import BaseRepository

__all__ = [
    "ID_LENGTH",
    "NAMING_CONVENTION",
    "Base",
    "BaseRepository",
    "CountOf",
    "Exists",
    "NotFoundError",
    "RepositoryError",
    "StatementFilter",
    "TimestampMixin",
    "UUIDv7PKMixin",
    "attach",
    "build_filter",
    "generate_uuid7",
    "optional",
    "utcnow",
]
