"""Composable filter criteria for store queries.

A `Criteria` collects SQLAlchemy boolean expressions. Each expression
carries its own bound parameter, so adding a filter appends the predicate
text and its value together; there is no separate placeholder counter to
keep in step with a parameter list. The same `Criteria` feeds both the row
query and the matching ``COUNT(*)`` query.
"""

from datetime import date
from typing import Any, Callable, Iterable, List, Optional, TypeVar

from sqlalchemy import Select, func, not_, or_, select
from sqlalchemy.sql.elements import ColumnElement

from database.models import DietHistoryRecord, RecipeRecord

V = TypeVar("V")


class Criteria:
    """Conjunction of filter expressions built up one clause at a time."""

    def __init__(self) -> None:
        self._clauses: List[ColumnElement] = []

    def add(self, clause: ColumnElement) -> "Criteria":
        self._clauses.append(clause)
        return self

    def add_if(self, value: Optional[V], build: Callable[[V], ColumnElement]) -> "Criteria":
        """Add ``build(value)`` unless ``value`` is None."""
        if value is not None:
            self._clauses.append(build(value))
        return self

    def add_each(self, values: Optional[Iterable[Any]], build: Callable[[Any], ColumnElement]) -> "Criteria":
        """Add one clause per element of ``values`` (AND semantics)."""
        for value in values or ():
            self._clauses.append(build(value))
        return self

    def apply(self, stmt: Select) -> Select:
        if not self._clauses:
            return stmt
        return stmt.where(*self._clauses)

    def count_statement(self, entity) -> Select:
        return self.apply(select(func.count()).select_from(entity))


def paginate(stmt: Select, limit: Optional[int], offset: Optional[int]) -> Select:
    """Apply LIMIT/OFFSET; an offset without limit skips rows without capping."""
    if limit is not None:
        stmt = stmt.limit(limit)
    if offset is not None:
        stmt = stmt.offset(offset)
    return stmt


def diet_history_criteria(
    user_id: str,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    meal_type: Optional[str] = None,
) -> Criteria:
    """Filters shared by the history listing and the history count."""
    history = DietHistoryRecord
    return (
        Criteria()
        .add(history.user_id == user_id)
        .add_if(start_date, lambda d: history.date_attempted >= d.isoformat())
        .add_if(end_date, lambda d: history.date_attempted <= d.isoformat())
        .add_if(meal_type, lambda m: history.meal_type == m)
    )


def recipe_criteria(
    query: Optional[str] = None,
    tags: Optional[Iterable[str]] = None,
    exclude_ingredients: Optional[Iterable[str]] = None,
    max_preparation_time: Optional[int] = None,
    difficulty_level: Optional[str] = None,
    meal_type: Optional[str] = None,
) -> Criteria:
    """Filters for recipe search.

    ``query`` matches title or description; every tag must be contained in
    the serialized tag list; any excluded ingredient found in the
    serialized ingredient list rejects the recipe.
    """
    recipe = RecipeRecord
    return (
        Criteria()
        .add_if(query, lambda q: or_(recipe.title.contains(q, autoescape=True),
                                     recipe.description.contains(q, autoescape=True)))
        .add_each(tags, lambda t: recipe.tags.contains(t, autoescape=True))
        .add_each(exclude_ingredients, lambda i: not_(recipe.ingredients.contains(i, autoescape=True)))
        .add_if(max_preparation_time, lambda t: recipe.preparation_time <= t)
        .add_if(difficulty_level, lambda d: recipe.difficulty_level == d)
        .add_if(meal_type, lambda m: recipe.meal_type == m)
    )
