"""Tests for WhatsApp status and conversation history endpoints."""

from uuid import uuid4

from neuron.constants.whatsapp import ConversationStatus, MessageSender
from neuron.models.whatsapp_message import WhatsappMessage


def test_status_reflects_channel_state(client, app, admin_headers):
    r = client.get("/whatsapp/status", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["connected"] is False

    app.state.runtime.channel_state.mark_ready()
    r2 = client.get("/whatsapp/status", headers=admin_headers)
    assert r2.json()["connected"] is True
    assert r2.json()["since"] is not None


def test_status_requires_permission(client, user_headers):
    assert client.get("/whatsapp/status", headers=user_headers).status_code == 403


def test_list_conversations_filtered_by_status(
    client, db, admin_headers, setup_conversation
):
    r = client.get("/whatsapp/conversations", headers=admin_headers)
    assert r.status_code == 200
    assert [c["id"] for c in r.json()["items"]] == [str(setup_conversation.id)]

    r2 = client.get(
        "/whatsapp/conversations",
        params={"status": ConversationStatus.COMPLETED.value},
        headers=admin_headers,
    )
    assert r2.json()["items"] == []

    r3 = client.get(
        "/whatsapp/conversations",
        params={"status": ConversationStatus.ACTIVE.value},
        headers=admin_headers,
    )
    assert r3.json()["total"] == 1


def test_list_conversations_invalid_status_is_400(client, admin_headers):
    r = client.get(
        "/whatsapp/conversations", params={"status": "BOGUS"}, headers=admin_headers
    )
    assert r.status_code == 400


def test_conversation_detail_orders_messages(
    client, db, admin_headers, setup_conversation
):
    db.add_all(
        [
            WhatsappMessage(
                conversation_id=setup_conversation.id,
                position=3,
                sender=MessageSender.BOT.value,
                content="Que tipo de sistema?",
            ),
            WhatsappMessage(
                conversation_id=setup_conversation.id,
                position=2,
                sender=MessageSender.CONTACT.value,
                content="Quero sim",
            ),
        ]
    )
    db.commit()

    r = client.get(
        f"/whatsapp/conversations/{setup_conversation.id}", headers=admin_headers
    )
    assert r.status_code == 200
    data = r.json()
    assert [m["position"] for m in data["messages"]] == [1, 2, 3]
    assert [m["sender"] for m in data["messages"]] == ["BOT", "CONTACT", "BOT"]
    assert data["contact"]["id"] == str(setup_conversation.contact_id)


def test_conversation_detail_not_found(client, admin_headers):
    r = client.get(f"/whatsapp/conversations/{uuid4()}", headers=admin_headers)
    assert r.status_code == 404
