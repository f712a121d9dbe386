"""
Session flow - credential check, session tokens and password change.
"""

import logging
from dataclasses import dataclass

from .exceptions import InvalidCredential, NotFound, TokenSignatureError, Unauthenticated
from .models import Account, Session, normalize_email
from .policy import FlowSettings
from .ports import SecretHasher, TokenIssuer, UserRepository

logger = logging.getLogger(__name__)

SESSION_PURPOSE = "session"


def issue_session_token(tokens: TokenIssuer, settings: FlowSettings, account: Account) -> str:
    """Sign a session token bound to the account's email."""
    payload = {"email": account.email, "sub": str(account.id), "purpose": SESSION_PURPOSE}
    return tokens.sign(payload, settings.session_secret, settings.session_token_expiry)


@dataclass
class SessionFlow:
    """Domain service for login and authenticated password changes."""

    users: UserRepository
    hasher: SecretHasher
    tokens: TokenIssuer
    settings: FlowSettings

    def login(self, login_or_email: str, password: str) -> Session:
        """
        Authenticate by login or email and issue a session token.

        Raises:
            NotFound: No account matches the login or email
            InvalidCredential: Password does not match
        """
        identifier = login_or_email.strip()
        account = self.users.find_by_email_or_login(normalize_email(identifier), identifier)
        if account is None:
            raise NotFound()

        if not self.hasher.verify(password, account.password_hash):
            logger.info("Rejected login for account %s", account.id)
            raise InvalidCredential()

        logger.info("Account %s logged in", account.id)
        return Session(account=account, token=issue_session_token(self.tokens, self.settings, account))

    def change_password(self, account_id: int, old_password: str, new_password: str) -> None:
        """
        Replace the password of an already authenticated account.

        Raises:
            NotFound: Account id does not resolve
            InvalidCredential: Old password does not match
        """
        account = self.users.find_by_id(account_id)
        if account is None:
            raise NotFound()

        if not self.hasher.verify(old_password, account.password_hash):
            raise InvalidCredential("Invalid old password")

        if self.users.update_by_id(account_id, self.hasher.hash(new_password)) is None:
            raise NotFound()
        logger.info("Password changed for account %s", account_id)

    def authenticate(self, token: str) -> Account:
        """
        Resolve the account a session token was issued for.

        Raises:
            Unauthenticated: Bad signature, wrong purpose, or the
                account no longer exists
        """
        try:
            payload = self.tokens.verify(token, self.settings.session_secret)
        except TokenSignatureError:
            raise Unauthenticated() from None

        email = payload.get("email")
        if payload.get("purpose") != SESSION_PURPOSE or not isinstance(email, str):
            raise Unauthenticated()

        account = self.users.find_by_email(email)
        if account is None:
            raise Unauthenticated()
        return account
