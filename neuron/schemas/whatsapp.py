"""Pydantic schemas for WhatsApp conversations and the finalize call."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from neuron.constants.whatsapp import ConversationStatus, MessageSender
from neuron.schemas.contact import ContactRead


class WhatsappMessageRead(BaseModel):
    id: UUID
    conversation_id: UUID
    position: int
    sender: MessageSender
    content: str
    created_at: datetime

    model_config = {"from_attributes": True}


class WhatsappConversationRead(BaseModel):
    id: UUID
    contact_id: UUID
    phone_number: str
    status: ConversationStatus
    summary: Optional[str] = None
    summary_sent_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WhatsappConversationDetail(WhatsappConversationRead):
    """Conversation with its contact and messages in creation order."""

    contact: Optional[ContactRead] = None
    messages: list[WhatsappMessageRead] = Field(default_factory=list)


class WhatsappStatusRead(BaseModel):
    connected: bool
    since: Optional[datetime] = None
    last_disconnect_reason: Optional[str] = None


class FinalizeConversationArgs(BaseModel):
    """Arguments the model must send with finalize_conversation (camelCase on the wire)."""

    contact_name: Optional[str] = Field(default=None, alias="contactName")
    business_summary: Optional[str] = Field(default=None, alias="businessSummary")
    project_objective: str = Field(alias="projectObjective")
    main_features: str = Field(alias="mainFeatures")
    integrations: Optional[str] = None
    preferred_stack: Optional[str] = Field(default=None, alias="preferredStack")
    hosting: Optional[str] = None
    has_design: Optional[str] = Field(default=None, alias="hasDesign")
    deadline: Optional[str] = None
    budget: Optional[str] = None
    urgency: str
    additional_notes: Optional[str] = Field(default=None, alias="additionalNotes")

    model_config = ConfigDict(populate_by_name=True)
