"""Statement filter base and predicate composition helpers.

Filters work directly with SQLAlchemy statements without hiding the query.

Usage:
    from video_service.core.database.filters import build_filter, optional

    predicate = build_filter(
        Video.visibility == Visibility.PUBLIC,
        optional(category_id, lambda value: Video.category_id == value),
        optional(user_id, lambda value: Video.user_id == value),
    )
    stmt = select(Video).where(predicate)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, TypeVar

from sqlalchemy import Select, and_, true

if TYPE_CHECKING:
    from collections.abc import Callable

    from sqlalchemy.sql.elements import ColumnElement

V = TypeVar("V")


class StatementFilter(ABC):
    """Base class for statement filters.

    All filters implement `apply()` which returns a modified statement.
    """

    @abstractmethod
    def apply(self, statement: Select[Any]) -> Select[Any]:
        """Apply filter to statement."""
        ...


def optional(
    value: V | None,
    factory: Callable[[V], ColumnElement[bool]],
) -> ColumnElement[bool] | None:
    """Build a predicate only when ``value`` is present.

    ``None`` means "filter not requested" and yields no clause; falsy values
    such as ``0`` or ``""`` still produce a predicate.
    """
    if value is None:
        return None
    return factory(value)


def build_filter(*clauses: ColumnElement[bool] | None) -> ColumnElement[bool]:
    """Fold optional predicates into a single conjunction.

    Absent (``None``) clauses are skipped. With nothing left the result is
    ``TRUE`` so callers can always pass it to ``where()``.
    """
    present = [clause for clause in clauses if clause is not None]
    if not present:
        return true()
    if len(present) == 1:
        return present[0]
    return and_(*present)


__all__ = ["StatementFilter", "build_filter", "optional"]
