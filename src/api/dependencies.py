"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain flows and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresUserRepository
from src.adapters.security import BcryptSecretHasher, JwtTokenIssuer
from src.config.settings import Settings, get_settings
from src.domain.exceptions import Unauthenticated
from src.domain.models import Account
from src.domain.ports import EphemeralStore, Notifier
from src.domain.registration import RegistrationFlow
from src.domain.reset import ResetFlow
from src.domain.session import SessionFlow

# Module-level singleton - JwtTokenIssuer is stateless
_token_issuer = JwtTokenIssuer()


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(request: Request) -> PostgresUserRepository:
    """Create repository with connection pool from app state."""
    return PostgresUserRepository(get_pool(request))


def get_ephemeral_store(request: Request) -> EphemeralStore:
    return request.app.state.ephemeral_store


def get_notifier(request: Request) -> Notifier:
    return request.app.state.notifier


def get_token_issuer() -> JwtTokenIssuer:
    """Get JWT token issuer (singleton)."""
    return _token_issuer


def get_registration_flow(
    request: Request, settings: Settings = Depends(get_settings)
) -> RegistrationFlow:
    """
    Create registration flow with injected dependencies.

    Wires together both stores, the hasher, token issuer and notifier.
    """
    return RegistrationFlow(
        store=get_ephemeral_store(request),
        users=get_repository(request),
        hasher=BcryptSecretHasher(settings.bcrypt_cost),
        tokens=get_token_issuer(),
        notifier=get_notifier(request),
        settings=settings.flow_settings(),
    )


def get_reset_flow(request: Request, settings: Settings = Depends(get_settings)) -> ResetFlow:
    """Create password reset flow with injected dependencies."""
    return ResetFlow(
        store=get_ephemeral_store(request),
        users=get_repository(request),
        hasher=BcryptSecretHasher(settings.bcrypt_cost),
        tokens=get_token_issuer(),
        notifier=get_notifier(request),
        settings=settings.flow_settings(),
    )


def get_session_flow(request: Request, settings: Settings = Depends(get_settings)) -> SessionFlow:
    """Create session flow with injected dependencies."""
    return SessionFlow(
        users=get_repository(request),
        hasher=BcryptSecretHasher(settings.bcrypt_cost),
        tokens=get_token_issuer(),
        settings=settings.flow_settings(),
    )


# Bearer scheme for OpenAPI documentation; missing headers are handled below
http_bearer = HTTPBearer(auto_error=False)


def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(http_bearer),
    flow: SessionFlow = Depends(get_session_flow),
) -> Account:
    """
    Resolve the account behind the Authorization bearer token.

    Raises:
        Unauthenticated: Header missing, or token rejected by SessionFlow
    """
    if credentials is None:
        raise Unauthenticated()
    return flow.authenticate(credentials.credentials)
