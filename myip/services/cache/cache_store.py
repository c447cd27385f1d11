from __future__ import annotations

import json
from datetime import datetime, timezone

from myip.domain.entities import CacheEntry, RegistryRecord
from myip.domain.errors import CacheDecodeError
from myip.domain.ports import KeyValueBackend
from .cache_policy import CACHE_TTL


def cache_key(address: str) -> str:
    return f"rdap:{address}"


def count_key(address: str) -> str:
    return f"count:{address}"


class RegistryCacheStore:
    """Registry records and per-address call counters on top of a key-value backend."""

    def __init__(self, backend: KeyValueBackend, ttl_seconds: int = int(CACHE_TTL.total_seconds())) -> None:
        self._backend = backend
        self._ttl_seconds = ttl_seconds

    async def get_cached(self, address: str) -> CacheEntry | None:
        """Return the cached entry, None when absent.

        Raises CacheDecodeError when the stored payload is corrupted.
        """
        payload = await self._backend.get(cache_key(address))
        if payload is None:
            return None
        try:
            raw = json.loads(payload)
            fetched_at = datetime.fromisoformat(raw["fetched_at"])
            record = RegistryRecord.from_dict(raw["info"])
        except (ValueError, TypeError, KeyError, AttributeError) as exc:
            raise CacheDecodeError(f"decode cache for {address}: {exc}") from exc
        if fetched_at.tzinfo is None:
            fetched_at = fetched_at.replace(tzinfo=timezone.utc)
        return CacheEntry(record=record, fetched_at=fetched_at)

    async def set_cached(self, address: str, record: RegistryRecord, fetched_at: datetime) -> None:
        payload = json.dumps({
            "fetched_at": fetched_at.astimezone(timezone.utc).isoformat(),
            "info": record.to_dict(),
        })
        await self._backend.set(cache_key(address), payload.encode("utf-8"), self._ttl_seconds)

    async def increment_count(self, address: str) -> int:
        return await self._backend.incr(count_key(address))

    async def ping(self) -> None:
        await self._backend.ping()
