"""Security adapters - Password hashing and token signing."""

from .bcrypt_hasher import BcryptSecretHasher
from .jwt_tokens import JwtTokenIssuer

__all__ = ["BcryptSecretHasher", "JwtTokenIssuer"]
