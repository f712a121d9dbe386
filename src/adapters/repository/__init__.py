"""Repository adapters - Database implementations."""

from .postgres import PostgresUserRepository, create_pool, run_migrations

__all__ = ["PostgresUserRepository", "create_pool", "run_migrations"]
