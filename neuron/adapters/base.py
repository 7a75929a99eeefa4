"""
Platform adapter interface.

Adapters encapsulate platform-specific logic and expose normalized
message shapes to the conversation engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from neuron.schemas.messaging import (
    ConnectionUpdate,
    InboundWhatsappMessage,
    OutboundSendResult,
)

WebhookEvent = Union[InboundWhatsappMessage, ConnectionUpdate]


class InvalidPayloadError(ValueError):
    """Raised when a webhook payload has an invalid shape."""


class ChannelNotReadyError(RuntimeError):
    """Raised when sending while the channel is disconnected."""


class BasePlatformAdapter(ABC):
    """Contract for messaging adapters. New platforms implement this interface."""

    @abstractmethod
    def parse_webhook(self, raw_payload: dict[str, Any]) -> Optional[WebhookEvent]:
        """Parse raw webhook payload. None for events the engine does not care about."""
        ...

    @abstractmethod
    async def send(self, phone_number: str, text: str) -> OutboundSendResult:
        """Send a text message. Raise ChannelNotReadyError when disconnected."""
        ...

    def verify_webhook(
        self, secret: Optional[str], request_headers: Optional[dict[str, str]] = None
    ) -> bool:
        """
        Verify webhook request (e.g. secret token). Override if platform supports it.
        Return True if valid or verification not required; False to reject.
        """
        return True
