"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- An in-memory account repository honouring email/login uniqueness
- A controllable clock driving the in-memory ephemeral store's TTLs
- Flow instances wired to real hashing and token adapters
"""

import threading
from dataclasses import replace
from datetime import timedelta
from unittest.mock import Mock

import pytest

from src.adapters.cache.memory import InMemoryEphemeralStore
from src.adapters.security import BcryptSecretHasher, JwtTokenIssuer
from src.domain.models import Account
from src.domain.policy import FlowSettings
from src.domain.registration import RegistrationFlow
from src.domain.reset import ResetFlow
from src.domain.session import SessionFlow


class FakeClock:
    """Monotonic clock advanced by hand."""

    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class InMemoryUserRepository:
    """UserRepository double; create() returns None on a uniqueness clash like the SQL adapter."""

    def __init__(self) -> None:
        self.accounts: dict[int, Account] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> Account | None:
        return next((a for a in self.accounts.values() if a.email == email), None)

    def find_by_login(self, login: str) -> Account | None:
        return next((a for a in self.accounts.values() if a.login == login), None)

    def find_by_email_or_login(self, email: str, login: str) -> Account | None:
        for account_id in sorted(self.accounts):
            account = self.accounts[account_id]
            if account.email == email or account.login == login:
                return account
        return None

    def find_by_id(self, account_id: int) -> Account | None:
        return self.accounts.get(account_id)

    def create(self, email: str, login: str, name: str, password_hash: str) -> Account | None:
        with self._lock:
            if self.find_by_email(email) or self.find_by_login(login):
                return None
            account = Account(self._next_id, email, login, name, password_hash)
            self.accounts[account.id] = account
            self._next_id += 1
            return account

    def update_by_id(self, account_id: int, password_hash: str) -> Account | None:
        account = self.accounts.get(account_id)
        if account is None:
            return None
        self.accounts[account_id] = replace(account, password_hash=password_hash)
        return self.accounts[account_id]

    def update_by_email(self, email: str, password_hash: str) -> Account | None:
        account = self.find_by_email(email)
        if account is None:
            return None
        return self.update_by_id(account.id, password_hash)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock: FakeClock) -> InMemoryEphemeralStore:
    return InMemoryEphemeralStore(clock=clock)


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def hasher() -> BcryptSecretHasher:
    """Minimum bcrypt cost keeps the suite fast."""
    return BcryptSecretHasher(rounds=4)


@pytest.fixture
def tokens() -> JwtTokenIssuer:
    return JwtTokenIssuer()


@pytest.fixture
def notifier() -> Mock:
    return Mock()


@pytest.fixture
def flow_settings() -> FlowSettings:
    return FlowSettings(
        session_secret="test-session-secret-with-enough-length",
        reset_secret="test-reset-secret-with-enough-length!",
        session_token_expiry=timedelta(hours=36),
        reset_token_expiry=timedelta(minutes=15),
    )


@pytest.fixture
def registration(store, users, hasher, tokens, notifier, flow_settings) -> RegistrationFlow:
    return RegistrationFlow(store, users, hasher, tokens, notifier, flow_settings)


@pytest.fixture
def reset(store, users, hasher, tokens, notifier, flow_settings) -> ResetFlow:
    return ResetFlow(store, users, hasher, tokens, notifier, flow_settings)


@pytest.fixture
def session(users, hasher, tokens, flow_settings) -> SessionFlow:
    return SessionFlow(users, hasher, tokens, flow_settings)


@pytest.fixture
def make_account(users: InMemoryUserRepository, hasher: BcryptSecretHasher):
    """Factory creating a committed account with a hashed password."""

    def _make(
        email: str = "alice@example.com", login: str = "alice", password: str = "OldPass1"
    ) -> Account:
        account = users.create(email, login, login.title(), hasher.hash(password))
        assert account is not None
        return account

    return _make


@pytest.fixture
def sent_code(notifier: Mock):
    """Reads the verification code out of the last notifier.send call."""

    def _read() -> str:
        _, _, body = notifier.send.call_args[0]
        return body.split("Your verification code: ", 1)[1].split()[0]

    return _read
