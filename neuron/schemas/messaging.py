"""
Normalized messaging contracts.

Adapters convert platform webhook payloads into these shapes; the
conversation engine consumes them through the event bus.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel


class InboundWhatsappMessage(BaseModel):
    """Text sent by a contact (adapter -> engine). phone is digits only."""

    phone: str
    text: str
    message_id: Optional[str] = None
    push_name: Optional[str] = None
    received_at: Optional[datetime] = None


class ConnectionUpdate(BaseModel):
    """Channel connection state change reported by the platform."""

    state: str
    reason: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.state == "open"


class OutboundSendResult(BaseModel):
    success: bool
    platform_message_id: Optional[str] = None


class ContactCreatedEvent(BaseModel):
    """Payload of the contact.created event."""

    id: UUID
    name: str
    email: str
    phone: Optional[str] = None
    description: str
