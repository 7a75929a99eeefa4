"""Contact CRUD."""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from neuron.exceptions import ConflictError
from neuron.models.contact import Contact
from neuron.models.whatsapp_conversation import WhatsappConversation
from neuron.schemas.contact import ContactCreate, ContactUpdate
from neuron.services.base_service import BaseService


class ContactService(BaseService[Contact]):
    resource_name = "Contact"

    def __init__(self, db: Session) -> None:
        super().__init__(db, Contact)

    def create_contact(self, data: ContactCreate) -> Contact:
        return self.create_record(data.model_dump())

    def update_contact(self, contact_id: UUID, data: ContactUpdate) -> Contact:
        contact = self.get_or_404(contact_id)
        return self.update_record(contact, data.model_dump(exclude_unset=True))

    def delete_contact(self, contact_id: UUID) -> None:
        contact = self.get_or_404(contact_id)
        has_history = (
            self.db.query(WhatsappConversation.id)
            .filter(WhatsappConversation.contact_id == contact.id)
            .first()
        )
        if has_history is not None:
            raise ConflictError(
                "contact",
                detail="Contact has WhatsApp conversations and cannot be removed",
            )
        self.delete_record(contact)
