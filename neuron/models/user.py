"""User model. The password hash never leaves the service layer."""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, Column, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from neuron.db import Base
from neuron.models.mixins import TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    role_id = Column(
        Uuid, ForeignKey("roles.id", ondelete="RESTRICT"), nullable=False
    )

    role = relationship("Role", back_populates="users", lazy="joined")
    tickets = relationship(
        "Ticket", back_populates="user", cascade="all, delete-orphan"
    )
