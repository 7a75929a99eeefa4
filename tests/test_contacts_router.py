"""Tests for contacts router."""

from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from neuron.constants.whatsapp import CONTACT_CREATED_EVENT, ConversationStatus
from neuron.models.whatsapp_conversation import WhatsappConversation
from neuron.models.whatsapp_message import WhatsappMessage


def test_create_contact_without_phone_opens_no_conversation(client, db, mock_publish):
    payload = {"name": "Maria", "email": "maria@x.com", "description": "Quero um site."}
    r = client.post("/contacts", json=payload)
    assert r.status_code == 201
    data = r.json()
    assert data["name"] == "Maria"
    assert data["phone"] is None
    assert db.query(WhatsappConversation).count() == 0


def test_create_contact_publishes_contact_created(client, mock_publish):
    payload = {
        "name": "João",
        "email": "joao@empresa.com.br",
        "phone": "(21) 98888-0002",
        "description": "Proposta comercial para desenvolvimento de API.",
    }
    r = client.post("/contacts", json=payload)
    assert r.status_code == 201
    mock_publish.assert_called_once()
    name, event = mock_publish.call_args.args
    assert name == CONTACT_CREATED_EVENT
    assert str(event.id) == r.json()["id"]
    assert event.phone == "(21) 98888-0002"


def test_create_contact_invalid_email_is_400(client):
    r = client.post(
        "/contacts", json={"name": "X", "email": "nope", "description": "y"}
    )
    assert r.status_code == 400


def test_list_and_get_contacts_are_public(client, setup_contact):
    r = client.get("/contacts")
    assert r.status_code == 200
    assert [c["id"] for c in r.json()["items"]] == [str(setup_contact.id)]

    r2 = client.get(f"/contacts/{setup_contact.id}")
    assert r2.status_code == 200
    assert r2.json()["email"] == setup_contact.email


def test_get_contact_not_found(client):
    r = client.get(f"/contacts/{uuid4()}")
    assert r.status_code == 404


def test_get_contact_bad_uuid_is_400(client):
    r = client.get("/contacts/not-a-uuid")
    assert r.status_code == 400


def test_update_contact_requires_permission(client, setup_contact, user_headers):
    r = client.patch(f"/contacts/{setup_contact.id}", json={"name": "Novo"})
    assert r.status_code == 401
    r2 = client.patch(
        f"/contacts/{setup_contact.id}", json={"name": "Novo"}, headers=user_headers
    )
    assert r2.status_code == 403


def test_update_and_delete_contact_as_admin(client, setup_contact, admin_headers):
    r = client.patch(
        f"/contacts/{setup_contact.id}", json={"name": "Novo"}, headers=admin_headers
    )
    assert r.status_code == 200
    assert r.json()["name"] == "Novo"

    r2 = client.delete(f"/contacts/{setup_contact.id}", headers=admin_headers)
    assert r2.status_code == 204
    assert client.get(f"/contacts/{setup_contact.id}").status_code == 404


def test_delete_contact_with_conversation_history_is_refused(
    client, db, setup_conversation, admin_headers
):
    setup_conversation.status = ConversationStatus.COMPLETED.value
    setup_conversation.summary = "Lead quer um site institucional."
    db.commit()

    r = client.delete(
        f"/contacts/{setup_conversation.contact_id}", headers=admin_headers
    )
    assert r.status_code == 409

    db.expire_all()
    assert db.query(WhatsappConversation).count() == 1
    assert db.query(WhatsappMessage).count() == 1
    assert client.get(f"/contacts/{setup_conversation.contact_id}").status_code == 200


def test_database_refuses_to_drop_conversation_history(db, setup_conversation):
    db.delete(setup_conversation.contact)
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()
    assert db.query(WhatsappMessage).count() == 1
