"""
Domain layer - Pure business logic with zero framework imports.

This package contains the credential lifecycle: registration by email
code, password reset by code and single-use token, and session login.
It defines its own port interfaces for infrastructure abstraction.
"""

from .codes import CodeGenerator
from .exceptions import (
    AuthError,
    CodeExpiredOrMissing,
    Conflict,
    InvalidCode,
    InvalidCredential,
    InvalidOrExpiredToken,
    MissingPendingData,
    NotFound,
    TokenSignatureError,
    Unauthenticated,
)
from .models import Account, PendingRegistration, Registered, ResetState, Session
from .policy import FlowSettings
from .ports import EphemeralStore, Notifier, SecretHasher, TokenIssuer, UserRepository
from .registration import RegistrationFlow
from .reset import ResetFlow
from .session import SessionFlow

__all__ = [
    "Account",
    "AuthError",
    "CodeExpiredOrMissing",
    "CodeGenerator",
    "Conflict",
    "EphemeralStore",
    "FlowSettings",
    "InvalidCode",
    "InvalidCredential",
    "InvalidOrExpiredToken",
    "MissingPendingData",
    "NotFound",
    "Notifier",
    "PendingRegistration",
    "Registered",
    "RegistrationFlow",
    "ResetFlow",
    "ResetState",
    "SecretHasher",
    "Session",
    "SessionFlow",
    "TokenIssuer",
    "TokenSignatureError",
    "Unauthenticated",
    "UserRepository",
]
