"""Tests for the WhatsApp lead-qualification engine."""

import asyncio
from datetime import timedelta, timezone
from uuid import uuid4

import pytest

from neuron.constants import lead_messages as texts
from neuron.constants.whatsapp import (
    FINALIZE_FUNCTION_NAME,
    ConversationStatus,
    MessageSender,
)
from neuron.llm.gateway import GenerationFailed
from neuron.models.whatsapp_conversation import WhatsappConversation
from neuron.models.whatsapp_message import WhatsappMessage
from neuron.schemas.ai import AiCompletionResponse, AiFunctionCall
from neuron.schemas.messaging import ContactCreatedEvent, InboundWhatsappMessage
from neuron.schemas.whatsapp import FinalizeConversationArgs
from neuron.services.conversation_engine import build_ai_messages, build_brief

CONTACT_PHONE = "5521999998888"

FINALIZE_ARGS = {
    "contactName": "Maria",
    "businessSummary": "Clínica de estética em Niterói",
    "projectObjective": "Agendamento online de consultas",
    "mainFeatures": "Agenda, lembretes por WhatsApp, pagamento via Pix",
    "integrations": "Mercado Pago",
    "deadline": "3 meses",
    "budget": "R$ 20 mil",
    "urgency": "Média",
}


def _contact_created(contact):
    return ContactCreatedEvent(
        id=contact.id,
        name=contact.name,
        email=contact.email,
        phone=contact.phone,
        description=contact.description,
    )


def _inbound(text, phone=CONTACT_PHONE + "@s.whatsapp.net"):
    return InboundWhatsappMessage(phone=phone, text=text)


def _messages(db, conversation_id):
    return (
        db.query(WhatsappMessage)
        .filter(WhatsappMessage.conversation_id == conversation_id)
        .order_by(WhatsappMessage.position)
        .all()
    )


def _finalize_response(args=None):
    return AiCompletionResponse(
        function_calls=[
            AiFunctionCall(name=FINALIZE_FUNCTION_NAME, args=args or FINALIZE_ARGS)
        ]
    )


# -----------------------------------------------------------------------------
# contact.created
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_contact_created_starts_conversation_with_greeting(
    db, make_engine, fake_channel, setup_contact
):
    engine = make_engine()
    await engine.handle_contact_created(_contact_created(setup_contact))

    conversation = db.query(WhatsappConversation).one()
    assert conversation.status == ConversationStatus.ACTIVE.value
    assert conversation.phone_number == CONTACT_PHONE

    assert len(fake_channel.sent) == 1
    phone, greeting = fake_channel.sent[0]
    assert phone == CONTACT_PHONE
    assert setup_contact.name in greeting
    assert setup_contact.description in greeting
    assert "Noah" in greeting

    stored = _messages(db, conversation.id)
    assert [(m.position, m.sender, m.content) for m in stored] == [
        (1, MessageSender.BOT.value, greeting)
    ]


@pytest.mark.asyncio
async def test_contact_without_phone_opens_nothing(
    db, make_engine, fake_channel, setup_contact_without_phone
):
    engine = make_engine()
    await engine.handle_contact_created(_contact_created(setup_contact_without_phone))
    assert db.query(WhatsappConversation).count() == 0
    assert fake_channel.sent == []


@pytest.mark.asyncio
async def test_contact_created_while_disconnected_is_skipped(
    db, make_engine, channel_state, fake_channel, setup_contact
):
    channel_state.mark_disconnected("logged out")
    engine = make_engine()
    await engine.handle_contact_created(_contact_created(setup_contact))
    assert db.query(WhatsappConversation).count() == 0
    assert fake_channel.sent == []


@pytest.mark.asyncio
async def test_second_contact_created_does_not_open_another_conversation(
    db, make_engine, fake_channel, setup_contact
):
    engine = make_engine()
    event = _contact_created(setup_contact)
    await asyncio.gather(
        engine.handle_contact_created(event), engine.handle_contact_created(event)
    )
    await engine.handle_contact_created(event)

    assert db.query(WhatsappConversation).count() == 1
    assert len(fake_channel.sent) == 1


@pytest.mark.asyncio
async def test_greeting_send_failure_is_contained(
    db, make_engine, fake_channel, setup_contact
):
    fake_channel.fail_for = CONTACT_PHONE
    engine = make_engine()
    await engine.handle_contact_created(_contact_created(setup_contact))

    conversation = db.query(WhatsappConversation).one()
    assert _messages(db, conversation.id) == []


# -----------------------------------------------------------------------------
# whatsapp.message
# -----------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_inbound_message_gets_model_reply(
    db, make_engine, fake_channel, setup_conversation
):
    engine = make_engine(AiCompletionResponse(text="Legal! O que sua empresa faz?"))
    await engine.handle_inbound_message(_inbound("Quero sim"))

    assert fake_channel.sent == [(CONTACT_PHONE, "Legal! O que sua empresa faz?")]
    stored = _messages(db, setup_conversation.id)
    assert [(m.position, m.sender) for m in stored] == [
        (1, MessageSender.BOT.value),
        (2, MessageSender.CONTACT.value),
        (3, MessageSender.BOT.value),
    ]
    assert stored[1].content == "Quero sim"


@pytest.mark.asyncio
async def test_model_receives_context_and_history(
    make_engine, setup_conversation, setup_contact
):
    engine = make_engine(AiCompletionResponse(text="Certo."))
    await engine.handle_inbound_message(_inbound("Quero sim"))

    messages, config = engine.gateway.calls[0]
    assert messages[0].role == "user"
    assert messages[0].content.startswith("[CONTEXTO INTERNO")
    assert setup_contact.email in messages[0].content
    assert [(m.role, m.content) for m in messages[1:]] == [
        ("model", "Olá! Aqui é o Noah."),
        ("user", "Quero sim"),
    ]
    assert "Noah" in config.system_instruction
    assert [fn.name for fn in config.function_declarations] == [FINALIZE_FUNCTION_NAME]


@pytest.mark.asyncio
async def test_message_from_unknown_number_is_dropped(
    db, make_engine, fake_channel, setup_conversation
):
    engine = make_engine(AiCompletionResponse(text="nunca enviado"))
    await engine.handle_inbound_message(_inbound("Oi", phone="5511912345678"))

    assert engine.gateway.calls == []
    assert fake_channel.sent == []
    assert len(_messages(db, setup_conversation.id)) == 1


@pytest.mark.asyncio
async def test_local_number_matches_normalized_conversation(
    make_engine, fake_channel, setup_conversation
):
    engine = make_engine(AiCompletionResponse(text="Oi!"))
    await engine.handle_inbound_message(_inbound("Oi", phone="21999998888"))
    assert fake_channel.sent == [(CONTACT_PHONE, "Oi!")]


@pytest.mark.asyncio
async def test_stale_conversation_expires_without_reply(
    db, make_engine, fake_channel, setup_stale_conversation
):
    engine = make_engine(AiCompletionResponse(text="nunca enviado"))
    await engine.handle_inbound_message(_inbound("Ainda está aí?"))

    db.refresh(setup_stale_conversation)
    assert setup_stale_conversation.status == ConversationStatus.EXPIRED.value
    assert engine.gateway.calls == []
    assert fake_channel.sent == []
    assert len(_messages(db, setup_stale_conversation.id)) == 1


@pytest.mark.asyncio
async def test_message_after_completion_is_dropped(
    db, make_engine, fake_channel, setup_conversation
):
    setup_conversation.status = ConversationStatus.COMPLETED.value
    db.commit()

    engine = make_engine(AiCompletionResponse(text="nunca enviado"))
    await engine.handle_inbound_message(_inbound("Mais uma coisa"))
    assert engine.gateway.calls == []
    assert fake_channel.sent == []


@pytest.mark.asyncio
async def test_finalize_completes_conversation_and_notifies_admin(
    db, make_engine, fake_channel, setup_conversation, setup_contact
):
    engine = make_engine(_finalize_response(), whatsapp_admin_phone="5521900000000")
    await engine.handle_inbound_message(_inbound("Orçamento até 20 mil"))

    db.refresh(setup_conversation)
    assert setup_conversation.status == ConversationStatus.COMPLETED.value
    assert setup_conversation.summary_sent_at is not None
    assert "Agendamento online de consultas" in setup_conversation.summary

    (farewell_to, farewell), (admin_to, brief) = fake_channel.sent
    assert farewell_to == CONTACT_PHONE
    assert farewell.startswith("*Maria*")
    assert admin_to == "5521900000000"
    assert brief == setup_conversation.summary

    stored = _messages(db, setup_conversation.id)
    assert stored[-1].sender == MessageSender.BOT.value
    assert stored[-1].content == farewell


@pytest.mark.asyncio
async def test_admin_notification_failure_keeps_completion(
    db, make_engine, fake_channel, setup_conversation
):
    fake_channel.fail_for = "5521900000000"
    engine = make_engine(_finalize_response(), whatsapp_admin_phone="5521900000000")
    await engine.handle_inbound_message(_inbound("Pode fechar"))

    db.refresh(setup_conversation)
    assert setup_conversation.status == ConversationStatus.COMPLETED.value
    assert len(fake_channel.sent) == 1


@pytest.mark.asyncio
async def test_invalid_finalize_arguments_fall_back(
    db, make_engine, fake_channel, setup_conversation
):
    engine = make_engine(_finalize_response({"contactName": "Maria"}))
    await engine.handle_inbound_message(_inbound("Pode fechar"))

    db.refresh(setup_conversation)
    assert setup_conversation.status == ConversationStatus.ACTIVE.value
    assert fake_channel.sent == [(CONTACT_PHONE, texts.FALLBACK_REPLY)]


@pytest.mark.asyncio
async def test_finalize_call_wins_over_accompanying_text(
    db, make_engine, fake_channel, setup_conversation
):
    response = _finalize_response()
    response.text = "Perfeito, vou te passar mais uma pergunta."
    engine = make_engine(response, whatsapp_admin_phone="5521900000000")
    await engine.handle_inbound_message(_inbound("Orçamento até 20 mil"))

    db.refresh(setup_conversation)
    assert setup_conversation.status == ConversationStatus.COMPLETED.value
    sent_texts = [text for _, text in fake_channel.sent]
    assert len(sent_texts) == 2
    assert response.text not in sent_texts
    assert sent_texts[1] == setup_conversation.summary


@pytest.mark.asyncio
async def test_unrecognized_function_call_falls_through_to_text(
    db, make_engine, fake_channel, setup_conversation
):
    engine = make_engine(
        AiCompletionResponse(
            text="Qual o prazo ideal para você?",
            function_calls=[AiFunctionCall(name="schedule_meeting", args={})],
        )
    )
    await engine.handle_inbound_message(_inbound("Quero um app"))

    db.refresh(setup_conversation)
    assert setup_conversation.status == ConversationStatus.ACTIVE.value
    assert fake_channel.sent == [(CONTACT_PHONE, "Qual o prazo ideal para você?")]
    assert _messages(db, setup_conversation.id)[-1].content == (
        "Qual o prazo ideal para você?"
    )


@pytest.mark.asyncio
async def test_generation_failure_sends_fallback(
    db, make_engine, fake_channel, setup_conversation
):
    engine = make_engine(GenerationFailed("timeout"))
    await engine.handle_inbound_message(_inbound("Oi"))

    assert fake_channel.sent == [(CONTACT_PHONE, texts.FALLBACK_REPLY)]
    stored = _messages(db, setup_conversation.id)
    assert [m.sender for m in stored] == [
        MessageSender.BOT.value,
        MessageSender.CONTACT.value,
        MessageSender.BOT.value,
    ]


@pytest.mark.asyncio
async def test_generation_failure_without_fallback_stays_silent(
    db, make_engine, fake_channel, setup_conversation
):
    engine = make_engine(
        GenerationFailed("boom"), conversation_fallback_enabled=False
    )
    await engine.handle_inbound_message(_inbound("Oi"))

    assert fake_channel.sent == []
    db.refresh(setup_conversation)
    assert setup_conversation.status == ConversationStatus.ACTIVE.value
    assert len(_messages(db, setup_conversation.id)) == 2


@pytest.mark.asyncio
async def test_messages_keep_arrival_order(
    db, make_engine, fake_channel, setup_conversation
):
    engine = make_engine(
        AiCompletionResponse(text="resposta 1"),
        AiCompletionResponse(text="resposta 2"),
    )
    await asyncio.gather(
        engine.handle_inbound_message(_inbound("primeira")),
        engine.handle_inbound_message(_inbound("segunda")),
    )

    contents = [m.content for m in _messages(db, setup_conversation.id)]
    assert contents[1:] == ["primeira", "resposta 1", "segunda", "resposta 2"]
    positions = [m.position for m in _messages(db, setup_conversation.id)]
    assert positions == list(range(1, 6))


# -----------------------------------------------------------------------------
# Texts
# -----------------------------------------------------------------------------


def test_build_ai_messages_without_contact_uses_placeholders():
    messages = build_ai_messages(None, [])
    assert len(messages) == 1
    assert texts.UNKNOWN_NAME in messages[0].content
    assert texts.UNKNOWN_EMAIL in messages[0].content


def test_build_brief_skips_missing_optional_fields():
    args = FinalizeConversationArgs.model_validate(
        {"projectObjective": "Site institucional", "mainFeatures": "Blog", "urgency": "Baixa"}
    )
    brief = build_brief(args, None, CONTACT_PHONE, "Noah")

    assert texts.BRIEF_HEADER in brief
    assert f"📱 *Telefone:* {CONTACT_PHONE}" in brief
    assert texts.BRIEF_UNKNOWN_CONTACT in brief
    assert "🎯 *Objetivo:* Site institucional" in brief
    assert "Orçamento" not in brief
    assert "Integrações" not in brief
    assert brief.endswith("_Gerado automaticamente pelo Noah Bot_")


def test_is_expired_uses_configured_window(make_engine, setup_conversation):
    engine = make_engine(conversation_expire_hours=2)
    last_activity = setup_conversation.updated_at.replace(tzinfo=timezone.utc)
    assert not engine.is_expired(
        setup_conversation, now=last_activity + timedelta(hours=1)
    )
    assert engine.is_expired(setup_conversation, now=last_activity + timedelta(hours=3))


@pytest.mark.asyncio
async def test_unknown_conversation_id_is_ignored(db, make_engine):
    engine = make_engine()
    await engine._process_locked(db, uuid4(), "Oi")
    assert engine.gateway.calls == []
