"""Pydantic schemas for permissions (read-only)."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class PermissionRead(BaseModel):
    id: UUID
    resource: str
    action: str
    key: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
