"""
Test configuration and fixtures for myip tests.
"""
from __future__ import annotations

import asyncio
from typing import Dict, List

import pytest
from fastapi.testclient import TestClient

from myip.main import app
from myip.application.fetch_service import FetchService
from myip.dependencies import get_cache_store, get_fetch_service
from myip.domain.entities import RegistryEvent, RegistryRecord
from myip.domain.errors import BackendUnavailableError, RegistryLookupError
from myip.services.cache.cache_store import RegistryCacheStore
from myip.services.cache.memory_backend import InMemoryBackend


class FlakyBackend(InMemoryBackend):
    """In-memory backend whose operations can be switched to fail."""

    def __init__(self) -> None:
        super().__init__()
        self.fail_get = False
        self.fail_set = False
        self.fail_incr = False
        self.fail_ping = False

    async def get(self, key):
        if self.fail_get:
            raise BackendUnavailableError(f"get {key}: connection refused")
        return await super().get(key)

    async def set(self, key, value, ttl_seconds=None):
        if self.fail_set:
            raise BackendUnavailableError(f"set {key}: connection refused")
        await super().set(key, value, ttl_seconds)

    async def incr(self, key):
        if self.fail_incr:
            raise BackendUnavailableError(f"incr {key}: connection refused")
        return await super().incr(key)

    async def ping(self):
        if self.fail_ping:
            raise BackendUnavailableError("ping redis: connection refused")


class FakeLookup:
    """Registry lookup returning canned records or errors per address."""

    def __init__(self, records: Dict[str, RegistryRecord] | None = None, delay: float = 0.0) -> None:
        self.records = dict(records or {})
        self.errors: Dict[str, Exception] = {}
        self.delay = delay
        self.calls: List[str] = []

    async def lookup(self, address: str) -> RegistryRecord:
        self.calls.append(address)
        if self.delay:
            await asyncio.sleep(self.delay)
        if address in self.errors:
            raise self.errors[address]
        if address not in self.records:
            raise RegistryLookupError("unexpected status: 404 Not Found")
        return self.records[address]


@pytest.fixture
def backend():
    """Switchable in-memory key-value backend."""
    return FlakyBackend()


@pytest.fixture
def store(backend):
    return RegistryCacheStore(backend)


@pytest.fixture
def test_net_record():
    return RegistryRecord(
        country="US",
        handle="NET-1-2-3-0-1",
        ip_version="v4",
        name="TEST-NET",
        type="ALLOCATED PA",
        events=(
            RegistryEvent(action="registration", date="2001-01-01T00:00:00Z"),
            RegistryEvent(action="last changed", date="2020-06-01T12:00:00Z"),
        ),
    )


@pytest.fixture
def lookup(test_net_record):
    return FakeLookup({"1.2.3.4": test_net_record})


@pytest.fixture
def reported():
    """Errors received by the error sink."""
    return []


@pytest.fixture
def service(store, lookup, reported):
    return FetchService(store=store, lookup=lookup, on_error=reported.append)


@pytest.fixture
def client(service, store):
    """Create test client wired to the in-memory store and fake lookup."""
    app.dependency_overrides[get_fetch_service] = lambda: service
    app.dependency_overrides[get_cache_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
