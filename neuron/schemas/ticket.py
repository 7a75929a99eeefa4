"""Pydantic schemas for tickets."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field, HttpUrl, field_serializer

from neuron.constants.tickets import TicketPriority, TicketStatus


class TicketCreate(BaseModel):
    title: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1)
    priority: TicketPriority = TicketPriority.MEDIUM
    links: Optional[list[HttpUrl]] = None

    @field_serializer("links")
    def _links_as_str(self, links: Optional[list[HttpUrl]]) -> Optional[list[str]]:
        return [str(link) for link in links] if links is not None else None


class TicketUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[TicketPriority] = None
    status: Optional[TicketStatus] = None
    links: Optional[list[HttpUrl]] = None

    @field_serializer("links")
    def _links_as_str(self, links: Optional[list[HttpUrl]]) -> Optional[list[str]]:
        return [str(link) for link in links] if links is not None else None


class TicketRead(BaseModel):
    id: UUID
    title: str
    description: str
    priority: TicketPriority
    status: TicketStatus
    links: Optional[list[str]] = None
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
