from __future__ import annotations

import asyncio
import time
from typing import Callable, Dict, Tuple


class InMemoryBackend:
    """Process-local key-value backend used when Redis is not configured.

    Values expire lazily on read. Counters are stored as decimal bytes so the
    layout matches what Redis holds.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._data: Dict[str, Tuple[bytes, float | None]] = {}
        self._lock = asyncio.Lock()

    def _live(self, key: str) -> bytes | None:
        item = self._data.get(key)
        if item is None:
            return None
        value, expires_at = item
        if expires_at is not None and self._clock() >= expires_at:
            del self._data[key]
            return None
        return value

    async def get(self, key: str) -> bytes | None:
        return self._live(key)

    async def set(self, key: str, value: bytes, ttl_seconds: int | None = None) -> None:
        expires_at = self._clock() + ttl_seconds if ttl_seconds else None
        self._data[key] = (bytes(value), expires_at)

    async def incr(self, key: str) -> int:
        async with self._lock:
            current = self._live(key)
            count = int(current) + 1 if current is not None else 1
            expires_at = self._data[key][1] if current is not None else None
            self._data[key] = (str(count).encode(), expires_at)
            return count

    def ttl(self, key: str) -> float | None:
        """Seconds until `key` expires, or None when it has no expiry or is absent."""
        if self._live(key) is None:
            return None
        expires_at = self._data[key][1]
        if expires_at is None:
            return None
        return expires_at - self._clock()

    async def ping(self) -> None:
        return None

    async def close(self) -> None:
        self._data.clear()
