from __future__ import annotations

from barpos.application.ports.cache import CacheStore
from barpos.infrastructure.cache.redis_client import get_redis_client


class RedisCacheStore(CacheStore):
    def __init__(self, redis_url: str, timeout_seconds: float = 1.0) -> None:
        self._redis_url = redis_url
        self._timeout_seconds = timeout_seconds

    def get(self, key: str) -> str | None:
        value = get_redis_client(self._redis_url, timeout_seconds=self._timeout_seconds).get(key)
        if value is None:
            return None
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return str(value)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        get_redis_client(self._redis_url, timeout_seconds=self._timeout_seconds).set(
            name=key,
            value=value,
            ex=ttl_seconds,
        )

    def delete(self, key: str) -> None:
        get_redis_client(self._redis_url, timeout_seconds=self._timeout_seconds).delete(key)


class NullCacheStore(CacheStore):
    """Cache used when no redis is configured: every read misses."""

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        return None

    def delete(self, key: str) -> None:
        return None
