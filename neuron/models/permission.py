"""Permission model: one row per (resource, action) pair."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, String, UniqueConstraint, Uuid

from neuron.constants.permissions import permission_key
from neuron.db import Base
from neuron.models.mixins import TimestampMixin


class Permission(Base, TimestampMixin):
    """Seeded at install time, read-only afterwards."""

    __tablename__ = "permissions"

    __table_args__ = (
        UniqueConstraint("resource", "action", name="uq_permissions_resource_action"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    resource = Column(String(64), nullable=False)
    action = Column(String(32), nullable=False)
    description = Column(String(255), nullable=True)

    @property
    def key(self) -> str:
        return permission_key(self.resource, self.action)
