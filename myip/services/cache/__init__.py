"""Cache service component package."""
from .cache_policy import CACHE_TTL, REFRESH_AFTER, CachePolicy, needs_refresh
from .cache_store import RegistryCacheStore
from .memory_backend import InMemoryBackend
from .redis_backend import RedisBackend

__all__ = [
    "CACHE_TTL",
    "REFRESH_AFTER",
    "CachePolicy",
    "needs_refresh",
    "RegistryCacheStore",
    "InMemoryBackend",
    "RedisBackend",
]
