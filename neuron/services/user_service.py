"""User management. Passwords are hashed here and never returned."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from sqlalchemy.orm import Session

from neuron.auth.passwords import hash_password
from neuron.constants.roles import USER_ROLE
from neuron.exceptions import ConflictError, NotFoundError
from neuron.models.role import Role
from neuron.models.user import User
from neuron.schemas.user import UserCreate, UserUpdate
from neuron.services.base_service import BaseService
from neuron.services.role_service import RoleService


class UserService(BaseService[User]):
    resource_name = "User"

    def __init__(self, db: Session) -> None:
        super().__init__(db, User)
        self.role_service = RoleService(db)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()

    def create_user(self, data: UserCreate) -> User:
        email = data.email.lower()
        self._ensure_email_is_unique(email)
        role = self._resolve_role(data.role_id)
        return self.create_record(
            {
                "name": data.name,
                "email": email,
                "password_hash": hash_password(data.password),
                "is_active": data.is_active,
                "role_id": role.id,
            }
        )

    def update_user(self, user_id: UUID, data: UserUpdate) -> User:
        user = self.get_or_404(user_id)
        values = data.model_dump(exclude_unset=True)
        if values.get("email") is not None:
            values["email"] = values["email"].lower()
            self._ensure_email_is_unique(values["email"], exclude_id=user.id)
        password = values.pop("password", None)
        if password is not None:
            values["password_hash"] = hash_password(password)
        if values.get("role_id") is not None:
            values["role_id"] = self._resolve_role(values["role_id"]).id
        return self.update_record(user, values)

    def delete_user(self, user_id: UUID) -> None:
        self.delete_record(self.get_or_404(user_id))

    def _resolve_role(self, role_id: Optional[UUID]) -> Role:
        if role_id is not None:
            return self.role_service.get_or_404(role_id)
        role = self.role_service.get_by_name(USER_ROLE)
        if role is None:
            raise NotFoundError(USER_ROLE, "Role")
        return role

    def _ensure_email_is_unique(self, email: str, exclude_id: Optional[UUID] = None) -> None:
        existing = self.get_by_email(email)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError("email")
