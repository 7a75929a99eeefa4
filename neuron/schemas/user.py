"""Pydantic schemas for users. Passwords are write-only."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from neuron.schemas.role import RoleSummary


class UserCreate(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(min_length=8)
    role_id: Optional[UUID] = None
    is_active: bool = True


class UserUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=8)
    role_id: Optional[UUID] = None
    is_active: Optional[bool] = None


class UserRead(BaseModel):
    id: UUID
    name: str
    email: str
    is_active: bool
    role_id: UUID
    role: Optional[RoleSummary] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
