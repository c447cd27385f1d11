"""Application service combining call counting, registry cache and lookups."""
from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, TypeVar

from myip.domain.entities import EMPTY_RECORD, CacheEntry, FetchResponse, RegistryRecord
from myip.domain.errors import RegistryLookupError
from myip.domain.ports import CachePort, ErrorSink, RegistryLookupPort
from myip.services.cache.cache_policy import CachePolicy

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _ignore_error(exc: Exception) -> None:
    return None


class FetchService:
    """Serve registry data for an address, refreshing a stale cache when possible.

    Every downstream failure (counter, cache read, lookup, cache write) is
    reported through `on_error` and degraded; `fetch` itself does not raise for
    them. Concurrent refreshes of one address may both write the cache.
    """

    def __init__(
        self,
        store: CachePort,
        lookup: RegistryLookupPort | None = None,
        on_error: ErrorSink | None = None,
        policy: CachePolicy | None = None,
    ) -> None:
        self._store = store
        self._lookup = lookup
        self._on_error = on_error or _ignore_error
        self._policy = policy or CachePolicy()

    @property
    def lookup_enabled(self) -> bool:
        return self._lookup is not None

    def report(self, exc: Exception) -> None:
        """Hand a non-fatal error to the sink; the sink can never break a fetch."""
        try:
            self._on_error(exc)
        except Exception:
            logger.exception("Error sink raised while reporting %r", exc)

    async def fetch(self, address: str, timeout: float | None = None) -> FetchResponse:
        """
        Return the call count and best-available registry record for `address`.

        Args:
            address: IP address, assumed well-formed
            timeout: Deadline in seconds for the whole call; every downstream
                operation runs within the time left

        Returns:
            FetchResponse; `error` holds the counting failure, if any
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout if timeout is not None else None

        def bounded(awaitable: Awaitable[T]) -> Awaitable[T]:
            if deadline is None:
                return awaitable
            return asyncio.wait_for(awaitable, max(deadline - loop.time(), 0))

        count = 0
        count_error: Exception | None = None
        try:
            count = await bounded(self._store.increment_count(address))
        except Exception as exc:
            self.report(exc)
            count_error = exc

        if self._lookup is None:
            return FetchResponse(address=address, call_count=count, record=EMPTY_RECORD, error=count_error)

        cached: CacheEntry | None = None
        try:
            cached = await bounded(self._store.get_cached(address))
        except Exception as exc:
            self.report(exc)

        if cached is not None and not self._policy.needs_refresh(cached.fetched_at):
            return FetchResponse(address=address, call_count=count, record=cached.record, error=count_error)

        record = await self._refresh(address, cached, bounded)
        return FetchResponse(address=address, call_count=count, record=record, error=count_error)

    async def _refresh(self, address: str, cached: CacheEntry | None, bounded) -> RegistryRecord:
        try:
            fetched = await bounded(self._lookup.lookup(address))
        except Exception as exc:
            if not isinstance(exc, RegistryLookupError):
                wrapped = RegistryLookupError(f"rdap lookup for {address}: {exc!r}")
                wrapped.__cause__ = exc
                exc = wrapped
            self.report(exc)
            return cached.record if cached is not None else EMPTY_RECORD

        try:
            await bounded(self._store.set_cached(address, fetched, self._policy.now()))
        except Exception as exc:
            self.report(exc)
        return fetched
