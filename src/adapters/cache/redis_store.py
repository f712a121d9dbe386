"""
Redis ephemeral store adapter - Implements EphemeralStore protocol.

All keys carry their own TTL and Redis expires them; nothing in-process
sweeps. The client must be created with ``decode_responses=True`` so
values come back as ``str``.
"""

import logging
from collections.abc import Mapping

import redis
from redis.exceptions import WatchError

logger = logging.getLogger(__name__)


def create_redis_client(url: str, timeout_seconds: float) -> redis.Redis:
    """Create a Redis client with bounded connect and command timeouts."""
    client = redis.from_url(
        url,
        decode_responses=True,
        socket_timeout=timeout_seconds,
        socket_connect_timeout=timeout_seconds,
    )
    return client  # type: ignore[no-any-return]


class RedisEphemeralStore:
    """
    Implements EphemeralStore protocol via redis-py.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, client: redis.Redis) -> None:
        self._client = client

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._client.set(key, value, ex=ttl_seconds)

    def get(self, key: str) -> str | None:
        return self._client.get(key)  # type: ignore[return-value]

    def delete(self, key: str) -> None:
        self._client.delete(key)

    def hash_set(self, key: str, mapping: Mapping[str, str], ttl_seconds: int) -> None:
        """Write fields and TTL in one MULTI/EXEC so the hash never lives without expiry."""
        with self._client.pipeline(transaction=True) as pipe:
            pipe.hset(key, mapping=dict(mapping))
            pipe.expire(key, ttl_seconds)
            pipe.execute()

    def hash_get_all(self, key: str) -> dict[str, str]:
        return self._client.hgetall(key) or {}  # type: ignore[return-value]

    def type_of(self, key: str) -> str:
        return self._client.type(key)  # type: ignore[return-value]

    def delete_if_equals(self, key: str, expected: str) -> bool:
        """
        Delete ``key`` only if it still holds ``expected``.

        Uses WATCH/MULTI/EXEC: if another client touches the key between
        the read and the delete, EXEC aborts and this call reports that it
        did not consume the value.
        """
        with self._client.pipeline() as pipe:
            try:
                pipe.watch(key)
                if pipe.get(key) != expected:
                    pipe.unwatch()
                    return False
                pipe.multi()
                pipe.delete(key)
                pipe.execute()
                return True
            except WatchError:
                logger.info("Concurrent update on %s, value not consumed", key)
                return False
