"""Pydantic schemas for roles."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from neuron.schemas.permission import PermissionRead


class RoleCreate(BaseModel):
    name: str = Field(min_length=1, max_length=50)
    description: str = Field(min_length=1, max_length=255)
    is_active: bool = True
    permission_ids: list[UUID] = Field(default_factory=list)


class RoleUpdate(BaseModel):
    """All fields optional. permission_ids replaces the whole set when given."""

    name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    description: Optional[str] = Field(default=None, min_length=1, max_length=255)
    is_active: Optional[bool] = None
    permission_ids: Optional[list[UUID]] = None


class RoleSummary(BaseModel):
    id: UUID
    name: str

    model_config = {"from_attributes": True}


class RoleRead(BaseModel):
    id: UUID
    name: str
    description: Optional[str] = None
    is_active: bool
    permissions: list[PermissionRead] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
