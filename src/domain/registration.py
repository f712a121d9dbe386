"""
Registration flow - email-code verified account creation.

Registration State Machine
==========================

States:
- NONE: No pending registration for the email
- PENDING: Registration data and code staged in the ephemeral store
- COMMITTED: Account row exists in the durable store

Transitions:
    NONE -> PENDING       (request_code; overwrites any earlier pending data)
    PENDING -> COMMITTED  (confirm with the correct code; code consumed)
    PENDING -> NONE       (TTL expiry in the ephemeral store)

Nothing durable is written until confirm succeeds. The code is consumed
with an atomic delete-if-equal so it is never accepted twice, and the
durable store's uniqueness constraint decides concurrent confirmations.
"""

import logging
from dataclasses import dataclass, field

from .codes import CodeGenerator
from .exceptions import Conflict, InvalidCode, MissingPendingData
from .models import (
    PendingRegistration,
    Registered,
    normalize_email,
    pending_registration_key,
    registration_code_key,
)
from .notifications import REGISTRATION_SUBJECT, dispatch_code
from .policy import FlowSettings
from .ports import EphemeralStore, Notifier, SecretHasher, TokenIssuer, UserRepository
from .session import issue_session_token

logger = logging.getLogger(__name__)


@dataclass
class RegistrationFlow:
    """
    Domain service for user registration.

    Orchestrates uniqueness checks, password hashing, staging of pending
    data, code issuance and the final account commit.
    """

    store: EphemeralStore
    users: UserRepository
    hasher: SecretHasher
    tokens: TokenIssuer
    notifier: Notifier
    settings: FlowSettings
    codes: CodeGenerator = field(default_factory=CodeGenerator)

    def request_code(self, email: str, login: str, name: str, password: str) -> str:
        """
        Stage a registration and send a verification code.

        Args:
            email: User's email address (will be normalized)
            login: Desired login (surrounding whitespace stripped)
            name: Display name
            password: Plaintext password (hashed before staging)

        Returns:
            Normalized email address

        Raises:
            Conflict: If an account already uses the email or login
        """
        email = normalize_email(email)
        login = login.strip()

        if self.users.find_by_email(email) is not None:
            raise Conflict("User with this email already exists")
        if self.users.find_by_login(login) is not None:
            raise Conflict("User with this login already exists")

        password_hash = self.hasher.hash(password)

        pending_key = pending_registration_key(email)
        stored_kind = self.store.type_of(pending_key)
        if stored_kind not in ("none", "hash"):
            logger.warning("Clearing stale %s entry at %s", stored_kind, pending_key)
            self.store.delete(pending_key)

        ttl = self.settings.registration_code_ttl_seconds
        pending = PendingRegistration(name=name, login=login, password_hash=password_hash)
        self.store.hash_set(pending_key, pending.to_mapping(), ttl)

        code = self.codes.generate()
        self.store.set(registration_code_key(email), code, ttl)
        logger.info("Registration code issued for %s", email)

        dispatch_code(self.notifier, email, REGISTRATION_SUBJECT, code, ttl)
        return email

    def confirm(self, email: str, code: str) -> Registered:
        """
        Verify the code and commit the staged registration.

        Args:
            email: User's email (will be normalized)
            code: Verification code received by email

        Returns:
            Registered with the new account and a session token

        Raises:
            InvalidCode: Code absent, mismatched or already consumed
            MissingPendingData: Staged registration expired or malformed
            Conflict: An account for the email or login now exists
        """
        email = normalize_email(email)
        code_key = registration_code_key(email)

        stored_code = self.store.get(code_key)
        if stored_code is None or stored_code != code:
            raise InvalidCode()

        pending_key = pending_registration_key(email)
        pending = PendingRegistration.from_mapping(self.store.hash_get_all(pending_key))
        if pending is None:
            raise MissingPendingData()

        # Fast path only; the unique constraint on create is authoritative.
        if self.users.find_by_email(email) is not None:
            raise Conflict("User with this email already exists")

        if not self.store.delete_if_equals(code_key, code):
            raise InvalidCode()

        account = self.users.create(
            email=email,
            login=pending.login,
            name=pending.name,
            password_hash=pending.password_hash,
        )
        if account is None:
            raise Conflict("User with this email or login already exists")

        self.store.delete(pending_key)
        logger.info("Account %s registered for %s", account.id, email)

        token = issue_session_token(self.tokens, self.settings, account)
        return Registered(account=account, token=token)
