"""Ephemeral store adapters - TTL key-value implementations."""

from .memory import InMemoryEphemeralStore
from .redis_store import RedisEphemeralStore, create_redis_client

__all__ = ["InMemoryEphemeralStore", "RedisEphemeralStore", "create_redis_client"]
