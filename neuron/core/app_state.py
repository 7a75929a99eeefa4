"""
Process-wide runtime objects, owned by the FastAPI application.

Built once by ``create_app`` and stored on ``app.state.runtime``; request
handlers reach it through ``get_runtime``. Nothing here is a module global.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from fastapi import Request

from neuron.adapters.evolution import EvolutionWhatsappAdapter
from neuron.config import Settings, get_settings
from neuron.constants.whatsapp import CONTACT_CREATED_EVENT, WHATSAPP_MESSAGE_EVENT
from neuron.core.channel_state import ChannelState
from neuron.core.events import EventBus
from neuron.infra.logging_config import get_logger
from neuron.llm.gateway import ModelGateway
from neuron.schemas.messaging import ConnectionUpdate
from neuron.services.conversation_engine import WhatsappConversationEngine

logger = get_logger(__name__)


class AppState:
    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.channel_state = ChannelState()
        self.events = EventBus()
        self.adapter: Optional[EvolutionWhatsappAdapter] = None
        self.engine: Optional[WhatsappConversationEngine] = None

    def configure_whatsapp(
        self, adapter: EvolutionWhatsappAdapter, gateway: ModelGateway, **engine_kwargs
    ) -> WhatsappConversationEngine:
        """Attach the channel and the model, and subscribe the engine's handlers."""
        self.adapter = adapter
        self.engine = WhatsappConversationEngine(
            channel=adapter,
            gateway=gateway,
            channel_state=self.channel_state,
            settings=self.settings,
            **engine_kwargs,
        )
        self.events.subscribe(
            CONTACT_CREATED_EVENT, self.engine.handle_contact_created
        )
        self.events.subscribe(
            WHATSAPP_MESSAGE_EVENT, self.engine.handle_inbound_message
        )
        return self.engine

    def apply_connection_update(self, update: ConnectionUpdate) -> None:
        if update.is_open:
            self.channel_state.mark_ready()
        elif update.state == "close":
            self.channel_state.mark_disconnected(update.reason)
        else:
            logger.debug("WhatsApp connection state: %s", update.state)

    async def start(self) -> None:
        self.events.bind(asyncio.get_running_loop())
        if self.adapter is not None:
            await self.probe_connection()

    async def stop(self) -> None:
        await self.events.drain()
        self.events.unbind()

    async def probe_connection(self) -> None:
        """Ask the instance whether it is already connected."""
        try:
            state = await asyncio.to_thread(self.adapter.fetch_connection_state)
        except Exception as e:
            logger.warning("Could not read WhatsApp connection state: %s", e)
            return
        self.apply_connection_update(ConnectionUpdate(state=state or "close"))


def get_runtime(request: Request) -> AppState:
    """FastAPI dependency returning the application's runtime objects."""
    return request.app.state.runtime
