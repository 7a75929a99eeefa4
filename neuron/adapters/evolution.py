"""
WhatsApp adapter for the Evolution API.

Parses ``messages.upsert`` and ``connection.update`` webhook events and
sends text through ``POST {base}/message/sendText/{instance}``. HTTP calls
use requests in a worker thread so the event loop is never blocked.
"""

from __future__ import annotations

import asyncio
import hmac
from datetime import datetime, timezone
from typing import Any, Optional

import requests

from neuron.adapters.base import (
    BasePlatformAdapter,
    ChannelNotReadyError,
    InvalidPayloadError,
    WebhookEvent,
)
from neuron.core.channel_state import ChannelState
from neuron.infra.logging_config import get_logger
from neuron.schemas.messaging import (
    ConnectionUpdate,
    InboundWhatsappMessage,
    OutboundSendResult,
)
from neuron.utils.phone import strip_jid

logger = get_logger(__name__)

REQUEST_TIMEOUT_SECONDS = 15
MESSAGES_UPSERT = "messages.upsert"
CONNECTION_UPDATE = "connection.update"
GROUP_JID_SUFFIX = "@g.us"


def _event_name(payload: dict[str, Any]) -> str:
    # Evolution emits both "messages.upsert" and "MESSAGES_UPSERT" depending on config
    return str(payload.get("event") or "").strip().lower().replace("_", ".")


def _extract_text(data: dict[str, Any]) -> Optional[str]:
    message = data.get("message") or {}
    message_type = data.get("messageType")
    if message_type == "conversation" or "conversation" in message:
        return message.get("conversation")
    if message_type == "extendedTextMessage" or "extendedTextMessage" in message:
        return (message.get("extendedTextMessage") or {}).get("text")
    return None


class EvolutionWhatsappAdapter(BasePlatformAdapter):
    WEBHOOK_SECRET_HEADER = "X-Webhook-Secret"

    def __init__(
        self,
        base_url: str,
        instance: str,
        api_key: Optional[str],
        channel_state: ChannelState,
        webhook_secret: Optional[str] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._instance = instance
        self._api_key = api_key
        self._channel_state = channel_state
        self._webhook_secret = webhook_secret

    def verify_webhook(
        self, secret: Optional[str], request_headers: Optional[dict[str, str]] = None
    ) -> bool:
        """Validate X-Webhook-Secret if a webhook secret is configured."""
        expected = secret or self._webhook_secret
        if not expected:
            return True
        request_headers = request_headers or {}
        header_lower = self.WEBHOOK_SECRET_HEADER.lower()
        actual = None
        for key, value in request_headers.items():
            if key.lower() == header_lower:
                actual = value
                break
        if actual is None:
            return False
        return hmac.compare_digest(actual.encode("utf-8"), expected.encode("utf-8"))

    def parse_webhook(self, raw_payload: dict[str, Any]) -> Optional[WebhookEvent]:
        event = _event_name(raw_payload)
        data = raw_payload.get("data")
        if not isinstance(data, dict):
            raise InvalidPayloadError("missing data object")
        if event == CONNECTION_UPDATE:
            state = data.get("state")
            if not state:
                raise InvalidPayloadError("missing connection state")
            reason = data.get("statusReason")
            return ConnectionUpdate(
                state=str(state), reason=str(reason) if reason is not None else None
            )
        if event == MESSAGES_UPSERT:
            return self._parse_message(data)
        return None

    def _parse_message(self, data: dict[str, Any]) -> Optional[InboundWhatsappMessage]:
        key = data.get("key") or {}
        remote_jid = key.get("remoteJid")
        if not remote_jid or not isinstance(remote_jid, str):
            raise InvalidPayloadError("missing remoteJid")
        if key.get("fromMe") or remote_jid.endswith(GROUP_JID_SUFFIX):
            return None
        text = _extract_text(data)
        if not text or not text.strip():
            return None
        timestamp = data.get("messageTimestamp")
        received_at = (
            datetime.fromtimestamp(int(timestamp), tz=timezone.utc)
            if isinstance(timestamp, (int, float, str)) and str(timestamp).isdigit()
            else datetime.now(timezone.utc)
        )
        return InboundWhatsappMessage(
            phone=strip_jid(remote_jid),
            text=text,
            message_id=key.get("id"),
            push_name=data.get("pushName"),
            received_at=received_at,
        )

    async def send(self, phone_number: str, text: str) -> OutboundSendResult:
        if not self._channel_state.ready:
            raise ChannelNotReadyError("WhatsApp channel is not connected")
        body = await asyncio.to_thread(self._post_text, phone_number, text)
        message_id = None
        if isinstance(body, dict):
            message_id = (body.get("key") or {}).get("id")
        return OutboundSendResult(success=True, platform_message_id=message_id)

    def fetch_connection_state(self) -> Optional[str]:
        """Ask the instance for its state ("open", "close", "connecting")."""
        url = f"{self._base_url}/instance/connectionState/{self._instance}"
        response = requests.get(
            url, headers=self._headers(), timeout=REQUEST_TIMEOUT_SECONDS
        )
        response.raise_for_status()
        body = response.json()
        return (body.get("instance") or {}).get("state") or body.get("state")

    def _post_text(self, phone_number: str, text: str) -> Any:
        url = f"{self._base_url}/message/sendText/{self._instance}"
        response = requests.post(
            url,
            headers=self._headers(),
            json={"number": phone_number, "text": text},
            timeout=REQUEST_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        try:
            return response.json()
        except ValueError:
            return None

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["apikey"] = self._api_key
        return headers
