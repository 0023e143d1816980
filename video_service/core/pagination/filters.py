"""Keyset (seek) filter for SQLAlchemy queries.

Instead of OFFSET, the next page is found with a WHERE condition that seeks
strictly past the cursor row. For ``ORDER BY sort_key DESC, id DESC`` with a
cursor at ``(k, i)``:

    WHERE sort_key < k OR (sort_key = k AND id < i)

The comparison is strict on both terms, so the cursor row itself is never
returned again and rows sharing the cursor's sort key are split by id.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, and_, or_

from video_service.core.database.filters import StatementFilter

if TYPE_CHECKING:
    from sqlalchemy.sql.elements import ColumnElement

    from video_service.core.pagination.cursor import Cursor


@dataclass(frozen=True, slots=True)
class KeysetOrder:
    """Total order of a collection: ``sort_key DESC, id DESC``.

    Attributes:
        sort_key: Primary sort expression (a column or a correlated aggregate).
        id_column: Unique row identifier used to break ties.
        key_type: Python type of the sort key values, ``datetime`` or ``int``.
    """

    sort_key: ColumnElement[Any]
    id_column: ColumnElement[Any]
    key_type: type[datetime] | type[int] = datetime

    def accepts(self, value: object) -> bool:
        """Whether a cursor sort key can be compared with this order's sort key."""
        return isinstance(value, self.key_type) and not isinstance(value, bool)


class KeysetFilter(StatementFilter):
    """Apply keyset pagination to a statement.

    Adds, in order:
    1. the seek condition when a cursor is given,
    2. ``ORDER BY sort_key DESC, id DESC``,
    3. ``LIMIT limit + 1`` so the caller can tell whether another page exists.

    Example:
        stmt = KeysetFilter(
            KeysetOrder(Video.updated_at, Video.id),
            cursor=Cursor(id="abc", sort_key=last_updated_at),
            limit=20,
        ).apply(select(Video))
    """

    __slots__ = ("cursor", "limit", "order")

    def __init__(self, order: KeysetOrder, *, cursor: Cursor | None, limit: int) -> None:
        self.order = order
        self.cursor = cursor
        self.limit = limit

    def seek_condition(self) -> ColumnElement[bool] | None:
        if self.cursor is None:
            return None
        sort_key, id_column = self.order.sort_key, self.order.id_column
        return or_(
            sort_key < self.cursor.sort_key,
            and_(sort_key == self.cursor.sort_key, id_column < self.cursor.id),
        )

    def apply(self, statement: Select[Any]) -> Select[Any]:
        condition = self.seek_condition()
        if condition is not None:
            statement = statement.where(condition)
        return statement.order_by(
            self.order.sort_key.desc(),
            self.order.id_column.desc(),
        ).limit(self.limit + 1)


__all__ = ["KeysetFilter", "KeysetOrder"]
