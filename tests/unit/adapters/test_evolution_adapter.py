"""Tests for the Evolution API WhatsApp adapter."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from neuron.adapters.base import ChannelNotReadyError, InvalidPayloadError
from neuron.schemas.messaging import ConnectionUpdate, InboundWhatsappMessage


def _upsert(message, message_type=None, key=None, **data):
    payload = {
        "event": "messages.upsert",
        "data": {
            "key": key or {"remoteJid": "5521999998888@s.whatsapp.net", "id": "M1"},
            "message": message,
            **data,
        },
    }
    if message_type:
        payload["data"]["messageType"] = message_type
    return payload


def test_parse_plain_text_message(evolution_adapter):
    event = evolution_adapter.parse_webhook(
        _upsert({"conversation": "Oi"}, "conversation", messageTimestamp=1760000000)
    )
    assert isinstance(event, InboundWhatsappMessage)
    assert event.phone == "5521999998888"
    assert event.text == "Oi"
    assert event.message_id == "M1"
    assert event.received_at.timestamp() == 1760000000


def test_parse_extended_text_message(evolution_adapter):
    event = evolution_adapter.parse_webhook(
        _upsert({"extendedTextMessage": {"text": "Veja https://exemplo.com"}})
    )
    assert event.text == "Veja https://exemplo.com"


def test_parse_ignores_media_and_empty_text(evolution_adapter):
    assert evolution_adapter.parse_webhook(_upsert({"imageMessage": {}})) is None
    assert evolution_adapter.parse_webhook(_upsert({"conversation": "   "})) is None


def test_parse_ignores_own_and_group_messages(evolution_adapter):
    own = _upsert(
        {"conversation": "eco"},
        key={"remoteJid": "5521999998888@s.whatsapp.net", "fromMe": True},
    )
    group = _upsert({"conversation": "grupo"}, key={"remoteJid": "1203630@g.us"})
    assert evolution_adapter.parse_webhook(own) is None
    assert evolution_adapter.parse_webhook(group) is None


def test_parse_uppercase_event_name(evolution_adapter):
    payload = {"event": "CONNECTION_UPDATE", "data": {"state": "open"}}
    event = evolution_adapter.parse_webhook(payload)
    assert event == ConnectionUpdate(state="open")
    assert event.is_open


@pytest.mark.parametrize(
    "payload",
    [
        {"event": "messages.upsert"},
        {"event": "messages.upsert", "data": "oops"},
        {"event": "messages.upsert", "data": {"key": {}}},
        {"event": "connection.update", "data": {}},
    ],
)
def test_parse_invalid_payload_raises(evolution_adapter, payload):
    with pytest.raises(InvalidPayloadError):
        evolution_adapter.parse_webhook(payload)


def test_verify_webhook(evolution_adapter):
    assert evolution_adapter.verify_webhook(None, {}) is True
    assert evolution_adapter.verify_webhook("s3cret", {"x-webhook-secret": "s3cret"})
    assert not evolution_adapter.verify_webhook("s3cret", {"X-Webhook-Secret": "nope"})
    assert not evolution_adapter.verify_webhook("s3cret", {})


@pytest.mark.asyncio
@patch("neuron.adapters.evolution.requests.post")
async def test_send_posts_text(mock_post, evolution_adapter):
    response = MagicMock()
    response.json.return_value = {"key": {"id": "OUT1"}}
    mock_post.return_value = response

    result = await evolution_adapter.send("5521999998888", "Olá")

    assert result.success is True
    assert result.platform_message_id == "OUT1"
    mock_post.assert_called_once_with(
        "http://evolution.local/message/sendText/neuron",
        headers={"Content-Type": "application/json", "apikey": "evo-key"},
        json={"number": "5521999998888", "text": "Olá"},
        timeout=15,
    )


@pytest.mark.asyncio
@patch("neuron.adapters.evolution.requests.post")
async def test_send_propagates_http_errors(mock_post, evolution_adapter):
    response = MagicMock()
    response.raise_for_status.side_effect = requests.HTTPError("500")
    mock_post.return_value = response

    with pytest.raises(requests.HTTPError):
        await evolution_adapter.send("5521999998888", "Olá")


@pytest.mark.asyncio
@patch("neuron.adapters.evolution.requests.post")
async def test_send_while_disconnected_raises(mock_post, evolution_adapter, channel_state):
    channel_state.mark_disconnected("close")
    with pytest.raises(ChannelNotReadyError):
        await evolution_adapter.send("5521999998888", "Olá")
    mock_post.assert_not_called()


@patch("neuron.adapters.evolution.requests.get")
def test_fetch_connection_state(mock_get, evolution_adapter):
    mock_get.return_value.json.return_value = {
        "instance": {"instanceName": "neuron", "state": "open"}
    }
    assert evolution_adapter.fetch_connection_state() == "open"
    assert mock_get.call_args.args[0] == (
        "http://evolution.local/instance/connectionState/neuron"
    )
