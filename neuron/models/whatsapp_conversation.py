"""WhatsappConversation model: one qualification dialogue with a contact."""

from __future__ import annotations

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import relationship

from neuron.constants.whatsapp import ConversationStatus
from neuron.db import Base
from neuron.models.mixins import TimestampMixin

_ACTIVE_ONLY = text("status = 'ACTIVE'")


class WhatsappConversation(Base, TimestampMixin):
    """ACTIVE until finalized (COMPLETED) or idle past the window (EXPIRED)."""

    __tablename__ = "whatsapp_conversations"

    __table_args__ = (
        # At most one ACTIVE conversation per contact, across processes
        Index(
            "uq_whatsapp_conversations_active_contact",
            "contact_id",
            unique=True,
            postgresql_where=_ACTIVE_ONLY,
            sqlite_where=_ACTIVE_ONLY,
        ),
        Index(
            "ix_whatsapp_conversations_phone_status", "phone_number", "status"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    contact_id = Column(
        Uuid, ForeignKey("contacts.id", ondelete="RESTRICT"), nullable=False
    )
    phone_number = Column(String(32), nullable=False)
    status = Column(
        String(16), nullable=False, default=ConversationStatus.ACTIVE.value
    )
    summary = Column(Text, nullable=True)
    summary_sent_at = Column(DateTime(timezone=True), nullable=True)

    contact = relationship("Contact", lazy="joined")
    messages = relationship(
        "WhatsappMessage",
        back_populates="conversation",
        order_by="WhatsappMessage.position",
    )
