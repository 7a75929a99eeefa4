"""Generic repository operations shared by the entity services."""

from __future__ import annotations

from typing import Any, Dict, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from neuron.exceptions import ConflictError, NotFoundError
from neuron.schemas.pagination import SortParams
from neuron.utils.db.filtering import apply_filters, apply_sort

T = TypeVar("T")


class BaseService(Generic[T]):
    """find_all / find_by_id / create / update / remove over one model."""

    resource_name = "Resource"

    def __init__(self, db: Session, model: Type[T]) -> None:
        self.db = db
        self.model = model

    def get(self, record_id: UUID) -> Optional[T]:
        return self.db.get(self.model, record_id)

    def get_or_404(self, record_id: UUID) -> T:
        record = self.get(record_id)
        if record is None:
            raise NotFoundError(record_id, self.resource_name)
        return record

    def list_query(
        self,
        sort: Optional[SortParams] = None,
        filters: Optional[Dict[str, Any]] = None,
    ) -> Query:
        """Query for pagination (fastapi-pagination's sqlalchemy paginate)."""
        query = self.db.query(self.model)
        query = apply_filters(query, self.model, filters)
        return apply_sort(query, self.model, sort)

    def create_record(self, values: Dict[str, Any]) -> T:
        record = self.model(**values)
        self.db.add(record)
        self._commit()
        self.db.refresh(record)
        return record

    def update_record(self, record: T, values: Dict[str, Any]) -> T:
        for key, value in values.items():
            setattr(record, key, value)
        self._commit()
        self.db.refresh(record)
        return record

    def delete_record(self, record: T) -> None:
        self.db.delete(record)
        self._commit()

    def _commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(
                "record", detail="The record conflicts with an existing one"
            ) from e
