"""Append-only message log of a conversation."""

from __future__ import annotations

from typing import List
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from neuron.constants.whatsapp import MessageSender
from neuron.models.mixins import utcnow
from neuron.models.whatsapp_conversation import WhatsappConversation
from neuron.models.whatsapp_message import WhatsappMessage


class WhatsappMessageService:
    def __init__(self, db: Session) -> None:
        self.db = db

    def append(
        self,
        conversation: WhatsappConversation,
        sender: MessageSender,
        content: str,
    ) -> WhatsappMessage:
        """Store the next message and bump the conversation's updated_at."""
        last_position = (
            self.db.query(func.max(WhatsappMessage.position))
            .filter(WhatsappMessage.conversation_id == conversation.id)
            .scalar()
        )
        message = WhatsappMessage(
            conversation_id=conversation.id,
            position=(last_position or 0) + 1,
            sender=sender.value,
            content=content,
        )
        self.db.add(message)
        conversation.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(message)
        return message

    def list_for_conversation(self, conversation_id: UUID) -> List[WhatsappMessage]:
        return (
            self.db.query(WhatsappMessage)
            .filter(WhatsappMessage.conversation_id == conversation_id)
            .order_by(WhatsappMessage.position)
            .all()
        )
