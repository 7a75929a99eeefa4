"""Sort parameters accepted by list endpoints alongside fastapi-pagination Params."""

from __future__ import annotations

from enum import StrEnum

from fastapi import Query
from pydantic import BaseModel


class SortOrder(StrEnum):
    ASC = "asc"
    DESC = "desc"


class SortParams(BaseModel):
    sort: str = "created_at"
    order: SortOrder = SortOrder.DESC


def sort_params(
    sort: str = Query("created_at", description="Column to sort by"),
    order: SortOrder = Query(SortOrder.DESC),
) -> SortParams:
    return SortParams(sort=sort, order=order)
