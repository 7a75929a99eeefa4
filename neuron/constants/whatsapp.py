"""Conversation statuses, message senders and event names."""

from enum import StrEnum


class ConversationStatus(StrEnum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    EXPIRED = "EXPIRED"


class MessageSender(StrEnum):
    BOT = "BOT"
    CONTACT = "CONTACT"


CONTACT_CREATED_EVENT = "contact.created"
WHATSAPP_MESSAGE_EVENT = "whatsapp.message"

FINALIZE_FUNCTION_NAME = "finalize_conversation"
