"""Read access to the seeded permission catalogue."""

from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from neuron.exceptions import NotFoundError
from neuron.models.permission import Permission
from neuron.services.base_service import BaseService


class PermissionService(BaseService[Permission]):
    resource_name = "Permission"

    def __init__(self, db: Session) -> None:
        super().__init__(db, Permission)

    def get_all(self) -> List[Permission]:
        return self.db.query(Permission).all()

    def get_by_resource_action(self, resource: str, action: str) -> Optional[Permission]:
        return (
            self.db.query(Permission)
            .filter(Permission.resource == resource, Permission.action == action)
            .first()
        )

    def resolve_ids(self, permission_ids: Iterable[UUID]) -> List[Permission]:
        """Load permissions in the given order. Unknown ids raise NotFoundError."""
        by_id = {p.id: p for p in self.get_all()}
        resolved: List[Permission] = []
        for permission_id in permission_ids:
            permission = by_id.get(permission_id)
            if permission is None:
                raise NotFoundError(permission_id, self.resource_name)
            if permission not in resolved:
                resolved.append(permission)
        return resolved
