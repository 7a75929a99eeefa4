"""WhatsappMessage model: append-only, ordered by position within a conversation."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from neuron.db import Base
from neuron.models.mixins import utcnow


class WhatsappMessage(Base):
    __tablename__ = "whatsapp_messages"

    __table_args__ = (
        UniqueConstraint(
            "conversation_id", "position", name="uq_whatsapp_messages_position"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    conversation_id = Column(
        Uuid,
        ForeignKey("whatsapp_conversations.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False)
    sender = Column(String(16), nullable=False)  # 'BOT' | 'CONTACT'
    content = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    conversation = relationship("WhatsappConversation", back_populates="messages")
