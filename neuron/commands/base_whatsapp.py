"""
Base command for WhatsApp-related operations.

Provides a shared way to build the Evolution API adapter from settings for
the application runtime and for webhook commands.
"""

from __future__ import annotations

from typing import Optional

from neuron.adapters.evolution import EvolutionWhatsappAdapter
from neuron.config import Settings, get_settings
from neuron.core.channel_state import ChannelState


class BaseWhatsappCommand:
    """
    Base for WhatsApp-related commands.
    Provides a shared way to obtain a configured EvolutionWhatsappAdapter.
    """

    @staticmethod
    def build_whatsapp_adapter(
        channel_state: ChannelState, settings: Optional[Settings] = None
    ) -> Optional[EvolutionWhatsappAdapter]:
        """Return a configured adapter, or None if WhatsApp is disabled."""
        settings = settings or get_settings()
        if not settings.whatsapp_enabled:
            return None
        if not settings.evolution_api_url or not settings.evolution_instance:
            return None
        return EvolutionWhatsappAdapter(
            base_url=settings.evolution_api_url,
            instance=settings.evolution_instance,
            api_key=settings.evolution_api_key,
            channel_state=channel_state,
            webhook_secret=settings.whatsapp_webhook_secret,
        )
