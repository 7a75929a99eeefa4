"""Connection state of the messaging channel, shared by the adapter and the engine."""

from __future__ import annotations

import threading
from datetime import datetime
from typing import Optional

from neuron.infra.logging_config import get_logger
from neuron.models.mixins import utcnow

logger = get_logger(__name__)


class ChannelState:
    """Starts not ready.

    ``mark_ready`` is called on a successful handshake (connection update
    "open" or a startup probe answering "open"); ``mark_disconnected`` on
    any close. Readers only see ``ready``.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._ready = False
        self._since: Optional[datetime] = None
        self._last_disconnect_reason: Optional[str] = None

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def since(self) -> Optional[datetime]:
        return self._since

    @property
    def last_disconnect_reason(self) -> Optional[str]:
        return self._last_disconnect_reason

    def mark_ready(self) -> None:
        with self._lock:
            if self._ready:
                return
            self._ready = True
            self._since = utcnow()
        logger.info("WhatsApp channel connected")

    def mark_disconnected(self, reason: Optional[str] = None) -> None:
        with self._lock:
            was_ready = self._ready
            self._ready = False
            self._since = utcnow()
            self._last_disconnect_reason = reason
        if was_ready:
            logger.warning("WhatsApp channel disconnected: %s", reason or "unknown")
