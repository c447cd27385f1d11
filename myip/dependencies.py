from __future__ import annotations

import logging
from functools import lru_cache

from myip.config import settings
from myip.domain.errors import ConfigurationError
from myip.domain.ports import KeyValueBackend
from myip.application.fetch_service import FetchService
from myip.infrastructure.rdap_client import RdapClient
from myip.services.cache.cache_policy import CachePolicy
from myip.services.cache.cache_store import RegistryCacheStore
from myip.services.cache.memory_backend import InMemoryBackend
from myip.services.cache.redis_backend import RedisBackend

logger = logging.getLogger(__name__)


def log_error(exc: Exception) -> None:
    """Error sink used by the running service."""
    logger.error(f"error: {exc}")


@lru_cache(maxsize=1)
def get_cache_backend() -> KeyValueBackend:
    store_type = settings.STORE_TYPE.lower()
    if store_type == "redis":
        if not settings.REDIS:
            raise ConfigurationError("REDIS is required when STORE_TYPE is redis")
        return RedisBackend.from_address(settings.REDIS, settings.REDIS_USER, settings.REDIS_PASS)
    if store_type == "memory":
        return InMemoryBackend()
    raise ConfigurationError(f"Unknown STORE_TYPE: {settings.STORE_TYPE}")


@lru_cache(maxsize=1)
def get_registry_lookup() -> RdapClient | None:
    if not settings.RDAP_API:
        return None
    return RdapClient(settings.RDAP_API, timeout=settings.RDAP_TIMEOUT)


def get_cache_store() -> RegistryCacheStore:
    return RegistryCacheStore(get_cache_backend())


def get_fetch_service() -> FetchService:
    return FetchService(
        store=get_cache_store(),
        lookup=get_registry_lookup(),
        on_error=log_error,
        policy=CachePolicy(),
    )


async def close_resources() -> None:
    """Release the shared backend and HTTP client."""
    if get_cache_backend.cache_info().currsize:
        await get_cache_backend().close()
    if get_registry_lookup.cache_info().currsize:
        lookup = get_registry_lookup()
        if lookup is not None:
            await lookup.aclose()
    get_cache_backend.cache_clear()
    get_registry_lookup.cache_clear()
