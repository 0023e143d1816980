"""Declarative aggregate columns for list and detail queries.

Instead of hand-writing a correlated subquery at each call site, a query
declares the aggregates it needs and attaches them to its select:

    view_count = CountOf("view_count", VideoView, VideoView.video_id == Video.id)
    like_count = CountOf(
        "like_count",
        VideoReaction,
        VideoReaction.video_id == Video.id,
        VideoReaction.type == ReactionType.LIKE,
    )
    stmt = attach(select(Video, User).join(User), view_count, like_count)

Each aggregate becomes a labelled correlated scalar subquery, so the result
rows expose ``row.view_count`` and ``row.like_count``. ``expression()`` returns
the bare subquery for use in ``ORDER BY`` or keyset predicates.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import func, literal, select

if TYPE_CHECKING:
    from sqlalchemy import Select
    from sqlalchemy.sql.elements import ColumnElement, Label


class CountOf:
    """``count(related WHERE correlation AND where...)`` as a named column."""

    __slots__ = ("correlation", "name", "related", "where")

    def __init__(
        self,
        name: str,
        related: Any,
        correlation: ColumnElement[bool],
        *where: ColumnElement[bool],
    ) -> None:
        self.name = name
        self.related = related
        self.correlation = correlation
        self.where = where

    def expression(self) -> ColumnElement[int]:
        return (
            select(func.count())
            .select_from(self.related)
            .where(self.correlation, *self.where)
            .correlate_except(self.related)
            .scalar_subquery()
        )

    def label(self) -> Label[int]:
        return self.expression().label(self.name)

    def __repr__(self) -> str:
        return f"CountOf({self.name!r})"


class Exists:
    """``EXISTS(related WHERE correlation AND where...)`` as a named boolean column."""

    __slots__ = ("correlation", "name", "related", "where")

    def __init__(
        self,
        name: str,
        related: Any,
        correlation: ColumnElement[bool],
        *where: ColumnElement[bool],
    ) -> None:
        self.name = name
        self.related = related
        self.correlation = correlation
        self.where = where

    def expression(self) -> ColumnElement[bool]:
        return (
            select(literal(1))
            .select_from(self.related)
            .where(self.correlation, *self.where)
            .correlate_except(self.related)
            .exists()
        )

    def label(self) -> Label[bool]:
        return self.expression().label(self.name)

    def __repr__(self) -> str:
        return f"Exists({self.name!r})"


def attach(statement: Select[Any], *aggregates: CountOf | Exists) -> Select[Any]:
    """Add the labelled aggregates to ``statement``'s columns."""
    return statement.add_columns(*(aggregate.label() for aggregate in aggregates))


__all__ = ["CountOf", "Exists", "attach"]
