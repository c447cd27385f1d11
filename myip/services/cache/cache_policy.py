from __future__ import annotations

from datetime import datetime, timedelta, timezone

# A cached record becomes eligible for refresh after REFRESH_AFTER but stays
# in the backend until CACHE_TTL, so it can still serve as a fallback.
REFRESH_AFTER = timedelta(hours=24)
CACHE_TTL = timedelta(days=7)


class CachePolicy:
    """Encapsulate caching heuristics such as freshness checks."""

    def __init__(self, clock: type[datetime] = datetime, refresh_after: timedelta = REFRESH_AFTER) -> None:
        self._clock = clock
        self._refresh_after = refresh_after

    def now(self) -> datetime:
        return self._clock.now(timezone.utc)

    def needs_refresh(self, fetched_at: datetime | None) -> bool:
        if fetched_at is None:
            return True
        if fetched_at.tzinfo is None:
            fetched_at = fetched_at.replace(tzinfo=timezone.utc)
        return self.now() - fetched_at >= self._refresh_after


_default_policy = CachePolicy()


def needs_refresh(fetched_at: datetime | None) -> bool:
    """Report whether a record fetched at `fetched_at` should be refreshed."""
    return _default_policy.needs_refresh(fetched_at)
