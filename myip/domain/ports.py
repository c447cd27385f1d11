"""Ports (abstractions) the application layer depends on."""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Protocol

from myip.domain.entities import CacheEntry, RegistryRecord


ErrorSink = Callable[[Exception], None]


class KeyValueBackend(Protocol):
    """Byte-oriented key-value store. Failures raise BackendUnavailableError."""

    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: bytes, ttl_seconds: int | None = None) -> None: ...

    async def incr(self, key: str) -> int: ...

    async def ping(self) -> None: ...

    async def close(self) -> None: ...


class CachePort(Protocol):
    async def get_cached(self, address: str) -> CacheEntry | None: ...

    async def set_cached(self, address: str, record: RegistryRecord, fetched_at: datetime) -> None: ...

    async def increment_count(self, address: str) -> int: ...


class RegistryLookupPort(Protocol):
    async def lookup(self, address: str) -> RegistryRecord: ...
