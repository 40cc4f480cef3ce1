from __future__ import annotations

import logging
from threading import Lock

import redis

logger = logging.getLogger(__name__)

_clients: dict[tuple[str, float], redis.Redis] = {}
_clients_lock = Lock()


def get_redis_client(redis_url: str, timeout_seconds: float = 1.0) -> redis.Redis:
    """Shared client per (url, timeout); the menu cache and readiness probe reuse one pool."""
    key = (redis_url, timeout_seconds)
    with _clients_lock:
        client = _clients.get(key)
        if client is None:
            client = redis.Redis.from_url(
                redis_url,
                socket_connect_timeout=timeout_seconds,
                socket_timeout=timeout_seconds,
            )
            _clients[key] = client
        return client


def ping_redis(redis_url: str, timeout_seconds: float = 1.0) -> bool:
    try:
        return bool(get_redis_client(redis_url, timeout_seconds).ping())
    except redis.RedisError as exc:
        logger.warning("redis_ping_failed", extra={"error": str(exc)})
        return False


def close_redis_clients() -> int:
    """Release every pooled connection at shutdown. Returns how many clients were closed."""
    with _clients_lock:
        clients = list(_clients.values())
        _clients.clear()
    for client in clients:
        client.close()
    return len(clients)
