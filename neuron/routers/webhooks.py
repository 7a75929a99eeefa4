"""
Webhook routes for inbound WhatsApp events.

The Evolution API POSTs raw events here. The route is public; the shared
secret header is checked by the command when configured.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from neuron.auth.rbac import PUBLIC
from neuron.commands.webhooks.whatsapp_command import WhatsappWebhookCommand
from neuron.core.app_state import AppState, get_runtime

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/whatsapp")
async def whatsapp_webhook(
    request: Request,
    _access=Depends(PUBLIC),
    runtime: AppState = Depends(get_runtime),
) -> dict[str, str]:
    """Receive Evolution API events. Returns 200 before any processing."""
    return await WhatsappWebhookCommand(runtime).execute(request)
