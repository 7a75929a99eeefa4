"""
WhatsApp lead-qualification engine.

Drives one conversation per contact through ACTIVE -> COMPLETED (the model
calls finalize_conversation) or ACTIVE -> EXPIRED (no activity within the
liveness window). Handlers run off the event bus: failures are logged and
never propagated.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, ContextManager, List, Optional, Sequence
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.orm import Session

from neuron.adapters.base import BasePlatformAdapter
from neuron.config import Settings, get_settings
from neuron.constants import lead_messages as texts
from neuron.constants.lead_qualification_prompt import LeadQualificationPrompt
from neuron.constants.whatsapp import (
    FINALIZE_FUNCTION_NAME,
    ConversationStatus,
    MessageSender,
)
from neuron.core.channel_state import ChannelState
from neuron.core.locks import KeyedLocks
from neuron.infra.logging_config import get_logger
from neuron.llm.gateway import GenerationFailed, ModelGateway
from neuron.models.contact import Contact
from neuron.models.mixins import utcnow
from neuron.models.whatsapp_conversation import WhatsappConversation
from neuron.models.whatsapp_message import WhatsappMessage
from neuron.schemas.ai import AiCompletionConfig, AiFunctionDeclaration, AiMessage
from neuron.schemas.messaging import ContactCreatedEvent, InboundWhatsappMessage
from neuron.schemas.whatsapp import FinalizeConversationArgs
from neuron.services.whatsapp_conversation_service import WhatsappConversationService
from neuron.services.whatsapp_message_service import WhatsappMessageService
from neuron.utils.db.db_session_helper import db_session
from neuron.utils.phone import normalize_phone_number, strip_jid

logger = get_logger(__name__)

SessionFactory = Callable[[], ContextManager[Session]]

_PREVIEW_CHARS = 40


def _preview(text: str) -> str:
    return text if len(text) <= _PREVIEW_CHARS else text[:_PREVIEW_CHARS] + "..."


def _as_utc(value: datetime) -> datetime:
    # sqlite hands back naive datetimes
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# -----------------------------------------------------------------------------
# Texts
# -----------------------------------------------------------------------------


def build_greeting(contact: Contact, bot_name: str, company_name: str) -> str:
    return texts.GREETING_TEMPLATE.format(
        name=contact.name,
        bot_name=bot_name,
        company_name=company_name,
        description=contact.description,
    )


def build_farewell(contact_name: Optional[str], company_name: str) -> str:
    return texts.FAREWELL_TEMPLATE.format(
        name=contact_name or texts.FAREWELL_NAME_FALLBACK,
        company_name=company_name,
    )


def build_internal_context(contact: Optional[Contact]) -> str:
    return texts.INTERNAL_CONTEXT_TEMPLATE.format(
        name=(contact.name if contact else None) or texts.UNKNOWN_NAME,
        email=(contact.email if contact else None) or texts.UNKNOWN_EMAIL,
        description=(contact.description if contact else None)
        or texts.UNKNOWN_DESCRIPTION,
    )


def build_ai_messages(
    contact: Optional[Contact], history: Sequence[WhatsappMessage]
) -> List[AiMessage]:
    """Internal context, then stored history (BOT -> model, CONTACT -> user)."""
    messages = [AiMessage(role="user", content=build_internal_context(contact))]
    for message in history:
        role = "model" if message.sender == MessageSender.BOT.value else "user"
        messages.append(AiMessage(role=role, content=message.content))
    return messages


def build_brief(
    args: FinalizeConversationArgs,
    contact: Optional[Contact],
    phone_number: str,
    bot_name: str,
) -> str:
    """Human-readable technical brief sent to the operator."""
    contact_name = args.contact_name or (contact.name if contact else None)
    email = contact.email if contact else None

    lines = [texts.BRIEF_HEADER, texts.BRIEF_SEPARATOR, ""]
    lines.append(f"👤 *Contato:* {contact_name or texts.BRIEF_UNKNOWN_CONTACT}")
    lines.append(f"📱 *Telefone:* {phone_number}")
    lines.append(f"📧 *Email:* {email or texts.BRIEF_UNKNOWN_EMAIL}")
    if args.business_summary:
        lines.append(f"🏢 *Negócio:* {args.business_summary}")

    lines += ["", texts.BRIEF_SEPARATOR, ""]
    lines.append(f"🎯 *Objetivo:* {args.project_objective}")
    lines += ["", "⚙️ *Funcionalidades principais:*", args.main_features]
    optional_scope = [
        ("🔗 *Integrações:*", args.integrations),
        ("💻 *Stack:*", args.preferred_stack),
        ("☁️ *Hospedagem:*", args.hosting),
        ("🎨 *Design:*", args.has_design),
    ]
    scope_lines = [f"{label} {value}" for label, value in optional_scope if value]
    if scope_lines:
        lines.append("")
        lines += scope_lines

    lines += ["", texts.BRIEF_SEPARATOR, ""]
    if args.deadline:
        lines.append(f"📅 *Prazo:* {args.deadline}")
    if args.budget:
        lines.append(f"💰 *Orçamento:* {args.budget}")
    lines.append(f"🔴 *Urgência:* {args.urgency}")
    if args.additional_notes:
        lines += ["", f"📝 *Notas:* {args.additional_notes}"]

    lines += ["", texts.BRIEF_SEPARATOR]
    lines.append(texts.BRIEF_FOOTER_TEMPLATE.format(bot_name=bot_name))
    return "\n".join(lines)


# -----------------------------------------------------------------------------
# Engine
# -----------------------------------------------------------------------------


class WhatsappConversationEngine:
    """Reacts to contact.created and whatsapp.message events."""

    def __init__(
        self,
        channel: BasePlatformAdapter,
        gateway: ModelGateway,
        channel_state: ChannelState,
        session_factory: SessionFactory = db_session,
        settings: Optional[Settings] = None,
    ) -> None:
        self.channel = channel
        self.gateway = gateway
        self.channel_state = channel_state
        self.session_factory = session_factory
        self.settings = settings or get_settings()
        self._contact_locks = KeyedLocks()
        self._conversation_locks = KeyedLocks()
        self._system_prompt = LeadQualificationPrompt.render(
            self.settings.bot_name, self.settings.company_name
        )
        self._finalize_declaration = AiFunctionDeclaration(
            name=FINALIZE_FUNCTION_NAME,
            description=LeadQualificationPrompt.FINALIZE_DESCRIPTION,
            parameters=LeadQualificationPrompt.FINALIZE_PARAMETERS,
        )

    @property
    def expire_after(self) -> timedelta:
        return timedelta(hours=self.settings.conversation_expire_hours)

    def is_expired(
        self, conversation: WhatsappConversation, now: Optional[datetime] = None
    ) -> bool:
        now = now or utcnow()
        return now - _as_utc(conversation.updated_at) > self.expire_after

    # -- contact.created ------------------------------------------------------

    async def handle_contact_created(self, event: ContactCreatedEvent) -> None:
        try:
            await self._start_conversation(event)
        except Exception:
            logger.exception("Failed to start conversation for contact %s", event.id)

    async def _start_conversation(self, event: ContactCreatedEvent) -> None:
        if not event.phone:
            logger.debug("Contact %s has no phone; no conversation", event.id)
            return
        if not self.channel_state.ready:
            logger.warning(
                "WhatsApp not connected; skipping conversation for contact %s",
                event.id,
            )
            return

        phone_number = normalize_phone_number(event.phone)
        async with self._contact_locks.lock_for(event.id):
            with self.session_factory() as db:
                conversations = WhatsappConversationService(db)
                conversation = None
                if conversations.get_active_by_contact(event.id) is None:
                    conversation = conversations.create_active(event.id, phone_number)
                if conversation is None:
                    logger.info(
                        "Contact %s already has an active conversation", event.id
                    )
                    return

                contact = conversation.contact
                greeting = build_greeting(
                    contact, self.settings.bot_name, self.settings.company_name
                )
                await self.channel.send(phone_number, greeting)
                WhatsappMessageService(db).append(
                    conversation, MessageSender.BOT, greeting
                )
                logger.info(
                    "Conversation %s started with contact %s", conversation.id, event.id
                )

    # -- whatsapp.message -----------------------------------------------------

    async def handle_inbound_message(self, event: InboundWhatsappMessage) -> None:
        try:
            await self._process_inbound(event)
        except Exception:
            logger.exception("Failed to process inbound WhatsApp message")

    async def _process_inbound(self, event: InboundWhatsappMessage) -> None:
        phone_number = normalize_phone_number(strip_jid(event.phone))
        with self.session_factory() as db:
            conversations = WhatsappConversationService(db)
            found = conversations.get_active_by_phone(phone_number)
            if found is None:
                logger.debug("No active conversation for %s, dropped", phone_number)
                return
            conversation_id = found.id

        async with self._conversation_locks.lock_for(conversation_id):
            with self.session_factory() as db:
                await self._process_locked(db, conversation_id, event.text)

    async def _process_locked(
        self, db: Session, conversation_id: UUID, text: str
    ) -> None:
        conversations = WhatsappConversationService(db)
        messages = WhatsappMessageService(db)

        conversation = conversations.get(conversation_id)
        if conversation is None:
            return
        if conversation.status != ConversationStatus.ACTIVE.value:
            logger.info(
                "Conversation %s is %s, dropped", conversation.id, conversation.status
            )
            return
        if self.is_expired(conversation):
            conversations.mark_expired(conversation)
            logger.info("Conversation %s expired", conversation.id)
            return

        messages.append(conversation, MessageSender.CONTACT, text)
        logger.info("Conversation %s received: %s", conversation.id, _preview(text))
        history = messages.list_for_conversation(conversation.id)
        contact = conversation.contact

        try:
            response = await self.gateway.generate_content(
                build_ai_messages(contact, history), self._completion_config()
            )
            finalize_call = response.find_call(FINALIZE_FUNCTION_NAME)
            finalize_args = None
            if finalize_call is not None:
                try:
                    finalize_args = FinalizeConversationArgs.model_validate(
                        finalize_call.args
                    )
                except ValidationError as e:
                    raise GenerationFailed(f"Invalid finalize arguments: {e}") from e
        except GenerationFailed as e:
            logger.error(
                "Generation failed for conversation %s: %s", conversation.id, e
            )
            await self._send_fallback(db, conversation)
            return

        if finalize_args is not None:
            await self._finalize(db, conversation, contact, finalize_args)
            return
        if response.text:
            await self.channel.send(conversation.phone_number, response.text)
            messages.append(conversation, MessageSender.BOT, response.text)
        else:
            logger.warning("Empty model reply for conversation %s", conversation.id)

    def _completion_config(self) -> AiCompletionConfig:
        return AiCompletionConfig(
            model=self.settings.llm_model,
            system_instruction=self._system_prompt,
            temperature=self.settings.llm_temperature,
            max_output_tokens=self.settings.llm_max_output_tokens,
            function_declarations=[self._finalize_declaration],
        )

    async def _finalize(
        self,
        db: Session,
        conversation: WhatsappConversation,
        contact: Optional[Contact],
        args: FinalizeConversationArgs,
    ) -> None:
        farewell = build_farewell(
            args.contact_name or (contact.name if contact else None),
            self.settings.company_name,
        )
        await self.channel.send(conversation.phone_number, farewell)
        WhatsappMessageService(db).append(conversation, MessageSender.BOT, farewell)

        brief = build_brief(
            args, contact, conversation.phone_number, self.settings.bot_name
        )
        WhatsappConversationService(db).mark_completed(conversation, brief)
        logger.info("Conversation %s completed", conversation.id)

        try:
            await self.channel.send(self.settings.whatsapp_admin_phone, brief)
        except Exception:
            logger.exception(
                "Failed to notify admin about conversation %s", conversation.id
            )

    async def _send_fallback(
        self, db: Session, conversation: WhatsappConversation
    ) -> None:
        if not self.settings.conversation_fallback_enabled:
            return
        try:
            await self.channel.send(conversation.phone_number, texts.FALLBACK_REPLY)
            WhatsappMessageService(db).append(
                conversation, MessageSender.BOT, texts.FALLBACK_REPLY
            )
        except Exception:
            logger.exception(
                "Failed to send fallback reply for conversation %s", conversation.id
            )
