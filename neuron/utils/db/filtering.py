"""Equality filters and sorting for list queries."""

from __future__ import annotations

from typing import Any, Dict, Optional

from sqlalchemy.orm import Query

from neuron.schemas.pagination import SortOrder, SortParams

DEFAULT_SORT_COLUMN = "created_at"


def apply_filters(query: Query, model: Any, filters: Optional[Dict[str, Any]]) -> Query:
    """Add ``column == value`` for each filter naming a real column. None values are skipped."""
    for name, value in (filters or {}).items():
        if value is None:
            continue
        column = model.__table__.columns.get(name)
        if column is None:
            continue
        query = query.filter(column == value)
    return query


def apply_sort(query: Query, model: Any, sort: Optional[SortParams]) -> Query:
    """Order by the requested column, falling back to created_at when unknown."""
    sort = sort or SortParams()
    columns = model.__table__.columns
    column = columns.get(sort.sort)
    if column is None:
        column = columns.get(DEFAULT_SORT_COLUMN)
    if column is None:
        return query
    ordered = column.asc() if sort.order == SortOrder.ASC else column.desc()
    # id breaks ties so pages stay stable
    return query.order_by(ordered, model.id)
