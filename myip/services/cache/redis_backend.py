from __future__ import annotations

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from myip.config import split_host_port
from myip.domain.errors import BackendUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_REDIS_PORT = 6379


class RedisBackend:
    """Encapsulate all interactions with Redis for cache entries and counters."""

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    @classmethod
    def from_address(cls, address: str, username: str = "", password: str = "") -> RedisBackend:
        host, port = split_host_port(address, DEFAULT_REDIS_PORT)
        client = aioredis.Redis(
            host=host,
            port=port,
            username=username or None,
            password=password or None,
        )
        return cls(client)

    async def get(self, key: str) -> bytes | None:
        try:
            return await self._client.get(key)
        except RedisError as exc:
            raise BackendUnavailableError(f"get {key}: {exc}") from exc

    async def set(self, key: str, value: bytes, ttl_seconds: int | None = None) -> None:
        try:
            await self._client.set(key, value, ex=ttl_seconds)
        except RedisError as exc:
            raise BackendUnavailableError(f"set {key}: {exc}") from exc

    async def incr(self, key: str) -> int:
        try:
            return int(await self._client.incr(key))
        except RedisError as exc:
            raise BackendUnavailableError(f"incr {key}: {exc}") from exc

    async def ping(self) -> None:
        try:
            await self._client.ping()
        except RedisError as exc:
            raise BackendUnavailableError(f"ping redis: {exc}") from exc

    async def close(self) -> None:
        await self._client.aclose()
        logger.debug("Redis connection pool closed")
