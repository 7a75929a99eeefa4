"""asyncio locks keyed by an id; unused locks are dropped automatically."""

from __future__ import annotations

import asyncio
import weakref
from typing import Hashable


class KeyedLocks:
    def __init__(self) -> None:
        self._locks: "weakref.WeakValueDictionary[Hashable, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )

    def lock_for(self, key: Hashable) -> asyncio.Lock:
        """Same lock object for the same key while anyone holds a reference."""
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock
