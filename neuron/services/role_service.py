"""Role management: unique names, permission sets, safe deletion."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from neuron.exceptions import ConflictError
from neuron.models.role import Role
from neuron.models.user import User
from neuron.schemas.role import RoleCreate, RoleUpdate
from neuron.services.base_service import BaseService
from neuron.services.permission_service import PermissionService


class RoleService(BaseService[Role]):
    resource_name = "Role"

    def __init__(self, db: Session) -> None:
        super().__init__(db, Role)
        self.permission_service = PermissionService(db)

    def get_by_name(self, name: str) -> Optional[Role]:
        return self.db.query(Role).filter(Role.name == name).first()

    def create_role(self, data: RoleCreate) -> Role:
        self._ensure_name_is_unique(data.name)
        permissions = self.permission_service.resolve_ids(data.permission_ids)
        role = Role(
            name=data.name,
            description=data.description,
            is_active=data.is_active,
            permissions=permissions,
        )
        self.db.add(role)
        self._commit()
        self.db.refresh(role)
        return role

    def update_role(self, role_id: UUID, data: RoleUpdate) -> Role:
        role = self.get_or_404(role_id)
        values = data.model_dump(exclude_unset=True)
        if values.get("name") is not None:
            self._ensure_name_is_unique(values["name"], exclude_id=role.id)
        permission_ids = values.pop("permission_ids", None)
        if permission_ids is not None:
            role.permissions = self.permission_service.resolve_ids(permission_ids)
        return self.update_record(role, values)

    def delete_role(self, role_id: UUID) -> None:
        role = self.get_or_404(role_id)
        in_use = self.db.query(User.id).filter(User.role_id == role.id).first()
        if in_use is not None:
            raise ConflictError(
                "role", detail="Role is assigned to users and cannot be removed"
            )
        self.delete_record(role)

    def _ensure_name_is_unique(self, name: str, exclude_id: Optional[UUID] = None) -> None:
        existing = self.get_by_name(name)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError("name")
