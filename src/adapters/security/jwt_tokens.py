"""
JWT token issuer - Implements TokenIssuer protocol.

Tokens are HS256 JWTs. The secret is chosen per call, so session and
reset tokens are signed with different keys and cannot stand in for one
another.
"""

import logging
import secrets
from collections.abc import Mapping
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from src.domain.exceptions import TokenSignatureError

logger = logging.getLogger(__name__)


class JwtTokenIssuer:
    """
    Implements TokenIssuer protocol via PyJWT.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, algorithm: str = "HS256") -> None:
        self.algorithm = algorithm

    def sign(self, payload: Mapping[str, Any], secret: str, expires_in: timedelta) -> str:
        """
        Create a signed token.

        Args:
            payload: Claims to embed
            secret: Signing secret
            expires_in: Lifetime from now

        Returns:
            Encoded JWT
        """
        now = datetime.now(UTC)
        claims = dict(payload)
        claims["iat"] = now
        claims["jti"] = secrets.token_urlsafe(16)
        claims["exp"] = now + expires_in
        return jwt.encode(claims, secret, algorithm=self.algorithm)

    def verify(self, token: str, secret: str) -> dict[str, Any]:
        """
        Decode a token, checking signature and expiry.

        Raises:
            TokenSignatureError: If the token is expired, forged or malformed
        """
        try:
            return jwt.decode(
                token,
                secret,
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Rejected expired token")
            raise TokenSignatureError("Token has expired") from None
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected invalid token: %s", e)
            raise TokenSignatureError("Invalid token") from None
