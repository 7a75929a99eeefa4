"""
In-process event bus.

Delivery is at-most-once and best-effort: events live only in memory,
each handler runs as its own asyncio task, failures are logged and never
retried. publish() is safe to call from the event loop or from worker
threads (sync FastAPI endpoints).
"""

from __future__ import annotations

import asyncio
from collections import defaultdict
from typing import Any, Awaitable, Callable, DefaultDict, List, Optional, Set

from neuron.infra.logging_config import get_logger

EventHandler = Callable[[Any], Awaitable[None]]

logger = get_logger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._handlers: DefaultDict[str, List[EventHandler]] = defaultdict(list)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._tasks: Set[asyncio.Task] = set()

    def bind(self, loop: asyncio.AbstractEventLoop) -> None:
        """Attach the loop that runs handlers (application startup)."""
        self._loop = loop

    def unbind(self) -> None:
        self._loop = None

    def subscribe(self, event_name: str, handler: EventHandler) -> None:
        self._handlers[event_name].append(handler)

    def publish(self, event_name: str, payload: Any) -> None:
        handlers = list(self._handlers.get(event_name, ()))
        if not handlers:
            return
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.warning("Event bus not running, dropping %s", event_name)
            return
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        if running is loop:
            self._schedule(event_name, payload, handlers)
        else:
            loop.call_soon_threadsafe(self._schedule, event_name, payload, handlers)

    async def drain(self) -> None:
        """Wait for every in-flight handler task, including ones they spawn."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _schedule(
        self, event_name: str, payload: Any, handlers: List[EventHandler]
    ) -> None:
        for handler in handlers:
            task = asyncio.ensure_future(self._run(event_name, handler, payload))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def _run(self, event_name: str, handler: EventHandler, payload: Any) -> None:
        try:
            await handler(payload)
        except Exception:
            logger.exception("Handler %r failed for event %s", handler, event_name)
