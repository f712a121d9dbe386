"""
Domain value types for accounts and ephemeral credential state.

Ephemeral entries are read back from an untyped key-value store, so the
types here own the translation to and from their stored shape and reject
anything that does not match it.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum


class ResetState(str, Enum):
    """
    Password reset lifecycle states.

    Transitions (forward-only):
        NO_REQUEST -> CODE_ISSUED   (request_reset)
        CODE_ISSUED -> TOKEN_ISSUED (verify_code, code consumed)
        TOKEN_ISSUED -> CONSUMED    (reset_password, token consumed)

    Expiry of the code or the token in the ephemeral store returns the
    flow to NO_REQUEST.
    """

    NO_REQUEST = "NO_REQUEST"
    CODE_ISSUED = "CODE_ISSUED"
    TOKEN_ISSUED = "TOKEN_ISSUED"
    CONSUMED = "CONSUMED"


@dataclass(frozen=True)
class Account:
    """Committed account row."""

    id: int
    email: str
    login: str
    name: str
    password_hash: str

    def public(self) -> dict[str, object]:
        """Account fields that are safe to return to a caller."""
        return {"id": self.id, "email": self.email, "login": self.login, "name": self.name}


@dataclass(frozen=True)
class PendingRegistration:
    """Registration data staged until the email code is confirmed."""

    name: str
    login: str
    password_hash: str

    FIELDS = ("name", "login", "password_hash")

    def to_mapping(self) -> dict[str, str]:
        return {"name": self.name, "login": self.login, "password_hash": self.password_hash}

    @classmethod
    def from_mapping(cls, data: Mapping[str, str]) -> "PendingRegistration | None":
        """Rebuild from a stored hash, or None if any field is missing or empty."""
        if not data or any(not data.get(field) for field in cls.FIELDS):
            return None
        return cls(name=data["name"], login=data["login"], password_hash=data["password_hash"])


@dataclass(frozen=True)
class Registered:
    """Result of a confirmed registration."""

    account: Account
    token: str


@dataclass(frozen=True)
class Session:
    """Result of a successful login."""

    account: Account
    token: str


def registration_code_key(email: str) -> str:
    return email


def pending_registration_key(email: str) -> str:
    return f"user:{email}"


def reset_code_key(email: str) -> str:
    return f"reset:code:{email}"


def reset_token_key(token: str) -> str:
    return f"reset:token:{token}"


def normalize_email(email: str) -> str:
    """Strip whitespace and lowercase."""
    return email.strip().lower()
