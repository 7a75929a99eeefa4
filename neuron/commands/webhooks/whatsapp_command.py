"""
Command to handle Evolution API webhook events.

Validates the shared secret, parses the payload, applies connection updates
to the channel state and hands inbound text to the event bus. The HTTP
caller gets its answer before any conversation processing happens.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import HTTPException, Request, status

from neuron.adapters.base import InvalidPayloadError
from neuron.commands.base_whatsapp import BaseWhatsappCommand
from neuron.constants.whatsapp import WHATSAPP_MESSAGE_EVENT
from neuron.core.app_state import AppState
from neuron.schemas.messaging import ConnectionUpdate, InboundWhatsappMessage


class WhatsappWebhookCommand(BaseWhatsappCommand):
    def __init__(self, runtime: AppState) -> None:
        self.runtime = runtime
        self.logger = logging.getLogger(__name__)

    async def execute(self, request: Request) -> dict[str, str]:
        """
        Execute the webhook: validate secret, parse body, dispatch.

        Returns:
            dict: {"status": "ok"} on success, including ignored events.

        Raises:
            HTTPException: 503 if WhatsApp is not configured, 403 on invalid
                secret, 400 on invalid JSON or payload.
        """
        adapter = self.runtime.adapter
        if adapter is None:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="WhatsApp integration is not configured or disabled",
            )
        headers = dict(request.headers) if request.headers else {}
        secret = self.runtime.settings.whatsapp_webhook_secret
        if not adapter.verify_webhook(secret, headers):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN, detail="Invalid webhook secret"
            )
        body = await self._read_json(request)
        try:
            event = adapter.parse_webhook(body)
        except (InvalidPayloadError, ValueError, KeyError, TypeError) as e:
            self.logger.warning("WhatsApp webhook parse error: %s", e)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid WhatsApp webhook payload",
            ) from e

        if isinstance(event, ConnectionUpdate):
            self.runtime.apply_connection_update(event)
        elif isinstance(event, InboundWhatsappMessage):
            self.logger.info("WhatsApp message received (id=%s)", event.message_id)
            self.runtime.events.publish(WHATSAPP_MESSAGE_EVENT, event)
        return {"status": "ok"}

    async def _read_json(self, request: Request) -> dict[str, Any]:
        try:
            body = await request.json()
        except ValueError as e:
            self.logger.warning("WhatsApp webhook invalid JSON: %s", e)
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid JSON body"
            ) from e
        if not isinstance(body, dict):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Body must be a JSON object",
            )
        return body
