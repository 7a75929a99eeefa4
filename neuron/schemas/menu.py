"""Pydantic schemas for the permission-filtered menu."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SidebarItemRead(BaseModel):
    label: str
    slug: str
    icon: str


class PageAccessRead(BaseModel):
    has_access: bool = Field(serialization_alias="hasAccess")

    model_config = ConfigDict(populate_by_name=True)
