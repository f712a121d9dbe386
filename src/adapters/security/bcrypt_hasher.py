"""
bcrypt password hasher - Implements SecretHasher protocol.

bcrypt's comparison is constant-time, and its cost factor dominates the
response time of every credential check.
"""

import bcrypt


class BcryptSecretHasher:
    """
    Implements SecretHasher protocol via bcrypt.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, rounds: int = 10) -> None:
        """
        Args:
            rounds: bcrypt cost factor (>= 10)
        """
        self._rounds = rounds

    def hash(self, secret: str) -> str:
        return bcrypt.hashpw(secret.encode(), bcrypt.gensalt(rounds=self._rounds)).decode()

    def verify(self, secret: str, hashed: str) -> bool:
        """Check a plaintext secret against a stored hash; malformed hashes never match."""
        try:
            return bcrypt.checkpw(secret.encode(), hashed.encode())
        except ValueError:
            return False
