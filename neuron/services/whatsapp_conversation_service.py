"""Conversation rows: lookups by contact/phone, status transitions, sweeps."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session, selectinload

from neuron.constants.whatsapp import ConversationStatus
from neuron.exceptions import NotFoundError
from neuron.models.mixins import utcnow
from neuron.models.whatsapp_conversation import WhatsappConversation
from neuron.schemas.pagination import SortParams
from neuron.services.base_service import BaseService


class WhatsappConversationService(BaseService[WhatsappConversation]):
    resource_name = "Conversation"

    def __init__(self, db: Session) -> None:
        super().__init__(db, WhatsappConversation)

    def conversations_query(
        self,
        status: Optional[ConversationStatus] = None,
        sort: Optional[SortParams] = None,
    ) -> Query:
        filters = {"status": status.value} if status else None
        return self.list_query(sort=sort, filters=filters)

    def get_with_messages(self, conversation_id: UUID) -> WhatsappConversation:
        conversation = (
            self.db.query(WhatsappConversation)
            .options(selectinload(WhatsappConversation.messages))
            .filter(WhatsappConversation.id == conversation_id)
            .first()
        )
        if conversation is None:
            raise NotFoundError(conversation_id, self.resource_name)
        return conversation

    def get_active_by_contact(self, contact_id: UUID) -> Optional[WhatsappConversation]:
        return (
            self.db.query(WhatsappConversation)
            .filter(
                WhatsappConversation.contact_id == contact_id,
                WhatsappConversation.status == ConversationStatus.ACTIVE.value,
            )
            .first()
        )

    def get_active_by_phone(self, phone_number: str) -> Optional[WhatsappConversation]:
        return (
            self.db.query(WhatsappConversation)
            .filter(
                WhatsappConversation.phone_number == phone_number,
                WhatsappConversation.status == ConversationStatus.ACTIVE.value,
            )
            .order_by(WhatsappConversation.created_at.desc())
            .first()
        )

    def create_active(
        self, contact_id: UUID, phone_number: str
    ) -> Optional[WhatsappConversation]:
        """Insert an ACTIVE conversation. None when another ACTIVE one won the race."""
        conversation = WhatsappConversation(
            contact_id=contact_id,
            phone_number=phone_number,
            status=ConversationStatus.ACTIVE.value,
        )
        self.db.add(conversation)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            return None
        self.db.refresh(conversation)
        return conversation

    def mark_expired(self, conversation: WhatsappConversation) -> WhatsappConversation:
        return self.update_record(
            conversation, {"status": ConversationStatus.EXPIRED.value}
        )

    def mark_completed(
        self, conversation: WhatsappConversation, summary: str
    ) -> WhatsappConversation:
        return self.update_record(
            conversation,
            {
                "status": ConversationStatus.COMPLETED.value,
                "summary": summary,
                "summary_sent_at": utcnow(),
            },
        )

    def expire_idle_before(self, cutoff: datetime, limit: int = 500) -> List[UUID]:
        """Mark ACTIVE conversations not updated since cutoff as EXPIRED."""
        stale = (
            self.db.query(WhatsappConversation)
            .filter(
                WhatsappConversation.status == ConversationStatus.ACTIVE.value,
                WhatsappConversation.updated_at < cutoff,
            )
            .limit(limit)
            .all()
        )
        for conversation in stale:
            conversation.status = ConversationStatus.EXPIRED.value
        self._commit()
        return [conversation.id for conversation in stale]
