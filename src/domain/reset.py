"""
Password reset flow - three-phase code, token and update sequence.

Each phase consumes the credential of the previous one:

    request_reset   NO_REQUEST   -> CODE_ISSUED   code stored for 600 s
    verify_code     CODE_ISSUED  -> TOKEN_ISSUED  code consumed, token stored for 900 s
    reset_password  TOKEN_ISSUED -> CONSUMED      token consumed, password updated

A reset token is honoured only when its store entry is present, its
signature verifies against the reset secret, and the signed email equals
the stored email. Any one check failing rejects the token.
"""

import logging
from dataclasses import dataclass, field

from .codes import CodeGenerator
from .exceptions import (
    CodeExpiredOrMissing,
    InvalidCode,
    InvalidOrExpiredToken,
    NotFound,
    TokenSignatureError,
)
from .models import ResetState, normalize_email, reset_code_key, reset_token_key
from .notifications import RESET_SUBJECT, dispatch_code
from .policy import FlowSettings
from .ports import EphemeralStore, Notifier, SecretHasher, TokenIssuer, UserRepository

logger = logging.getLogger(__name__)

RESET_PURPOSE = "reset"


@dataclass
class ResetFlow:
    """Domain service for password reset by email code."""

    store: EphemeralStore
    users: UserRepository
    hasher: SecretHasher
    tokens: TokenIssuer
    notifier: Notifier
    settings: FlowSettings
    codes: CodeGenerator = field(default_factory=CodeGenerator)

    def request_reset(self, email: str) -> ResetState:
        """
        Issue a reset code for an existing account.

        Raises:
            NotFound: No account uses the email
        """
        email = normalize_email(email)
        if self.users.find_by_email(email) is None:
            raise NotFound("User with this email not found")

        code = self.codes.generate()
        ttl = self.settings.reset_code_ttl_seconds
        self.store.set(reset_code_key(email), code, ttl)
        logger.info("Reset code issued for %s", email)

        dispatch_code(self.notifier, email, RESET_SUBJECT, code, ttl)
        return ResetState.CODE_ISSUED

    def verify_code(self, email: str, code: str) -> str:
        """
        Exchange a reset code for a single-use reset token.

        Returns:
            Signed reset token

        Raises:
            CodeExpiredOrMissing: No code stored, or consumed concurrently
            InvalidCode: Code mismatch
        """
        email = normalize_email(email)
        code_key = reset_code_key(email)

        stored_code = self.store.get(code_key)
        if stored_code is None:
            raise CodeExpiredOrMissing()
        if stored_code != code:
            raise InvalidCode()

        # Only the caller that removes the code may mint a token for it.
        if not self.store.delete_if_equals(code_key, code):
            raise CodeExpiredOrMissing()

        token = self.tokens.sign(
            {"email": email, "purpose": RESET_PURPOSE},
            self.settings.reset_secret,
            self.settings.reset_token_expiry,
        )
        self.store.set(reset_token_key(token), email, self.settings.reset_token_ttl_seconds)
        logger.info("Reset token issued for %s", email)
        return token

    def reset_password(self, token: str, new_password: str) -> ResetState:
        """
        Set a new password using a reset token, consuming the token.

        Raises:
            InvalidOrExpiredToken: Token absent from the store, signature
                invalid, or signed email not matching the stored one
        """
        token_key = reset_token_key(token)
        stored_email = self.store.get(token_key)
        if stored_email is None:
            raise InvalidOrExpiredToken()

        try:
            payload = self.tokens.verify(token, self.settings.reset_secret)
        except TokenSignatureError:
            raise InvalidOrExpiredToken() from None

        if payload.get("purpose") != RESET_PURPOSE or payload.get("email") != stored_email:
            raise InvalidOrExpiredToken()

        if not self.store.delete_if_equals(token_key, stored_email):
            raise InvalidOrExpiredToken()

        if self.users.update_by_email(stored_email, self.hasher.hash(new_password)) is None:
            raise NotFound()
        logger.info("Password reset for %s", stored_email)
        return ResetState.CONSUMED
