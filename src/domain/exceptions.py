"""
Domain exceptions - Semantic error types for the credential lifecycle.

Every flow failure is one of these types. Each carries a stable ``kind``
and a human-readable ``message`` so the boundary layer can translate it
to a response without leaking infrastructure details.
"""


class AuthError(Exception):
    """Base class for credential lifecycle domain errors."""

    kind = "auth_error"
    default_message = "Request failed"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class Conflict(AuthError):
    """An account with the same email or login already exists."""

    kind = "conflict"
    default_message = "User with this email already exists"


class NotFound(AuthError):
    """No account matches the lookup."""

    kind = "not_found"
    default_message = "User not found"


class InvalidCode(AuthError):
    """Verification code does not match the stored one."""

    kind = "invalid_code"
    default_message = "Invalid verification code"


class CodeExpiredOrMissing(AuthError):
    """No verification code is stored (never issued, expired or consumed)."""

    kind = "code_expired_or_missing"
    default_message = "Verification code not found or expired"


class InvalidCredential(AuthError):
    """Password does not match the stored hash."""

    kind = "invalid_credential"
    default_message = "Invalid password"


class InvalidOrExpiredToken(AuthError):
    """Token failed store presence, signature or email binding checks."""

    kind = "invalid_or_expired_token"
    default_message = "Invalid or expired token"


class Unauthenticated(InvalidOrExpiredToken):
    """Session token missing, invalid, or bound to an account that no longer exists."""

    kind = "unauthenticated"
    default_message = "Token is invalid or missing"


class MissingPendingData(AuthError):
    """Staged registration data expired before confirmation."""

    kind = "missing_pending_data"
    default_message = "No pending registration data"


class TokenSignatureError(Exception):
    """Raised by a TokenIssuer when a token cannot be verified."""

    pass
