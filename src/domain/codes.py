"""
Verification code generation.

Codes are short numeric strings delivered by email. They prove control of
the address, not identity, so they only need to be unpredictable.
"""

import secrets
from dataclasses import dataclass


@dataclass(frozen=True)
class CodeGenerator:
    """Produces fixed-length numeric codes without a leading zero."""

    length: int = 6

    def generate(self) -> str:
        """
        Generate a cryptographically secure verification code.

        Uses the secrets module for randomness. Returns a string so callers
        compare codes exactly as they were sent.
        """
        low = 10 ** (self.length - 1)
        return str(low + secrets.randbelow(9 * low))
