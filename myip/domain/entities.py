"""Internal domain entities shared by the cache, lookup and web layers."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class RegistryEvent:
    action: str = ""
    date: str = ""


@dataclass(frozen=True)
class RegistryRecord:
    """Selected registry fields for an address. All fields unset means no data."""

    country: str = ""
    handle: str = ""
    ip_version: str = ""
    name: str = ""
    type: str = ""
    events: Tuple[RegistryEvent, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        return not (
            self.country
            or self.handle
            or self.ip_version
            or self.name
            or self.type
            or self.events
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "country": self.country,
            "handle": self.handle,
            "ipVersion": self.ip_version,
            "name": self.name,
            "type": self.type,
            "events": [{"action": e.action, "date": e.date} for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> RegistryRecord:
        events = data.get("events") or []
        return cls(
            country=data.get("country") or "",
            handle=data.get("handle") or "",
            ip_version=data.get("ipVersion") or "",
            name=data.get("name") or "",
            type=data.get("type") or "",
            events=tuple(
                RegistryEvent(action=e.get("action") or "", date=e.get("date") or "")
                for e in events
            ),
        )


EMPTY_RECORD = RegistryRecord()


@dataclass(frozen=True)
class CacheEntry:
    record: RegistryRecord
    fetched_at: datetime


@dataclass(frozen=True)
class FetchResponse:
    """Result of one fetch. `error` is informational and never voids the rest."""

    address: str
    call_count: int
    record: RegistryRecord
    error: Exception | None = None

    @property
    def events(self) -> Tuple[RegistryEvent, ...]:
        return self.record.events
