"""Pydantic schemas for contacts."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field


class ContactCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=32)
    description: str = Field(min_length=1)


class ContactUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(default=None, max_length=32)
    description: Optional[str] = Field(default=None, min_length=1)


class ContactRead(BaseModel):
    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    description: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
