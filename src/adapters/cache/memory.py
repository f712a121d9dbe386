"""
In-memory ephemeral store - Implements EphemeralStore protocol.

Single-process stand-in for Redis, used for local development
(``EPHEMERAL_BACKEND=memory``) and tests. Entries expire against an
injectable monotonic clock: a read drops its own expired key, and every
write sweeps all expired keys so abandoned codes and pending hashes do
not accumulate.
"""

import threading
import time
from collections.abc import Callable, Mapping
from dataclasses import dataclass


@dataclass
class _Entry:
    value: str | dict[str, str]
    expires_at: float


class InMemoryEphemeralStore:
    """
    Implements EphemeralStore protocol with a dict and a lock.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _live(self, key: str) -> _Entry | None:
        entry = self._entries.get(key)
        if entry is not None and entry.expires_at <= self._clock():
            del self._entries[key]
            return None
        return entry

    def _sweep(self) -> None:
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.expires_at <= now]
        for key in expired:
            del self._entries[key]

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._sweep()
            self._entries[key] = _Entry(value, self._clock() + ttl_seconds)

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._live(key)
            if entry is None or not isinstance(entry.value, str):
                return None
            return entry.value

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)

    def hash_set(self, key: str, mapping: Mapping[str, str], ttl_seconds: int) -> None:
        with self._lock:
            self._sweep()
            entry = self._entries.get(key)
            fields = dict(entry.value) if entry is not None and isinstance(entry.value, dict) else {}
            fields.update(mapping)
            self._entries[key] = _Entry(fields, self._clock() + ttl_seconds)

    def hash_get_all(self, key: str) -> dict[str, str]:
        with self._lock:
            entry = self._live(key)
            if entry is None or not isinstance(entry.value, dict):
                return {}
            return dict(entry.value)

    def type_of(self, key: str) -> str:
        with self._lock:
            entry = self._live(key)
            if entry is None:
                return "none"
            return "hash" if isinstance(entry.value, dict) else "string"

    def delete_if_equals(self, key: str, expected: str) -> bool:
        with self._lock:
            entry = self._live(key)
            if entry is None or entry.value != expected:
                return False
            del self._entries[key]
            return True
