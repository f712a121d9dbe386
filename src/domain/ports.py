"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the credential flows
require from infrastructure. Adapters implement these protocols through
structural subtyping.
"""

from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Protocol

from .models import Account


class EphemeralStore(Protocol):
    """
    Port interface for the TTL key-value store.

    Holds pending registrations, verification codes and reset tokens.
    Expiry is enforced by the store itself; callers never sweep.
    """

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        """Store a string value, replacing any previous value and TTL."""
        ...

    def get(self, key: str) -> str | None:
        """Return the string value, or None when absent or expired."""
        ...

    def delete(self, key: str) -> None: ...

    def hash_set(self, key: str, mapping: Mapping[str, str], ttl_seconds: int) -> None:
        """Write hash fields and (re)set the key's TTL."""
        ...

    def hash_get_all(self, key: str) -> dict[str, str]:
        """Return all hash fields, or an empty dict when absent."""
        ...

    def type_of(self, key: str) -> str:
        """Return the stored kind: 'none', 'string' or 'hash'."""
        ...

    def delete_if_equals(self, key: str, expected: str) -> bool:
        """
        Atomically delete a string key only if it still holds ``expected``.

        Returns:
            True if this call removed the key, False if it was absent,
            held another value, or was removed concurrently
        """
        ...


class UserRepository(Protocol):
    """
    Port interface for durable account persistence.

    Lookups return None when no row matches. ``create`` returns None when
    the email or login uniqueness constraint rejects the row.
    """

    def find_by_email(self, email: str) -> Account | None: ...

    def find_by_login(self, login: str) -> Account | None: ...

    def find_by_email_or_login(self, email: str, login: str) -> Account | None:
        """First account whose email or login matches."""
        ...

    def find_by_id(self, account_id: int) -> Account | None: ...

    def create(self, email: str, login: str, name: str, password_hash: str) -> Account | None: ...

    def update_by_id(self, account_id: int, password_hash: str) -> Account | None: ...

    def update_by_email(self, email: str, password_hash: str) -> Account | None: ...


class SecretHasher(Protocol):
    """Port interface for one-way password hashing."""

    def hash(self, secret: str) -> str: ...

    def verify(self, secret: str, hashed: str) -> bool: ...


class TokenIssuer(Protocol):
    """Port interface for signed bearer tokens."""

    def sign(self, payload: Mapping[str, Any], secret: str, expires_in: timedelta) -> str: ...

    def verify(self, token: str, secret: str) -> dict[str, Any]:
        """
        Verify signature and expiry.

        Raises:
            TokenSignatureError: If the token is malformed, forged or expired
        """
        ...


class Notifier(Protocol):
    """Port interface for outbound messages."""

    def send(self, to_address: str, subject: str, body: str) -> None: ...
