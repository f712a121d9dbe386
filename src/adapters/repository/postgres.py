"""
PostgreSQL repository adapter - Implements UserRepository protocol.

This module provides the PostgreSQL implementation of the domain's
account repository port using psycopg3 with raw SQL.

Uniqueness Design:
-----------------
The ``accounts`` table carries UNIQUE constraints on ``email`` and
``login``. ``create`` uses INSERT ... ON CONFLICT DO NOTHING RETURNING, so
when two registrations race for the same email or login exactly one row
is inserted and the loser receives None instead of a constraint error.
Constraint text never reaches the domain layer.
"""

import logging
from pathlib import Path

from psycopg.rows import class_row
from psycopg_pool import ConnectionPool

from src.domain.models import Account

logger = logging.getLogger(__name__)

_COLUMNS = "id, email, login, name, password_hash"


def create_pool(
    conninfo: str, min_size: int, max_size: int, timeout_seconds: float
) -> ConnectionPool:
    """
    Create a connection pool with bounded checkout and statement time.

    Args:
        conninfo: PostgreSQL connection string
        min_size: Minimum connections kept open
        max_size: Maximum connections in pool
        timeout_seconds: Pool checkout timeout, also applied as statement_timeout
    """
    statement_timeout_ms = int(timeout_seconds * 1000)
    return ConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        timeout=timeout_seconds,
        kwargs={"options": f"-c statement_timeout={statement_timeout_ms}"},
    )


class PostgresUserRepository:
    """
    Implements UserRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def _fetch_one(self, sql: str, params: tuple) -> Account | None:
        with self._pool.connection() as conn, conn.cursor(row_factory=class_row(Account)) as cursor:
            cursor.execute(sql, params)
            row = cursor.fetchone()
            conn.commit()
            return row

    def find_by_email(self, email: str) -> Account | None:
        return self._fetch_one(f"SELECT {_COLUMNS} FROM accounts WHERE email = %s", (email,))

    def find_by_login(self, login: str) -> Account | None:
        return self._fetch_one(f"SELECT {_COLUMNS} FROM accounts WHERE login = %s", (login,))

    def find_by_email_or_login(self, email: str, login: str) -> Account | None:
        """First account, by id, whose email or login matches."""
        sql = f"""
            SELECT {_COLUMNS} FROM accounts
            WHERE email = %s OR login = %s
            ORDER BY id
            LIMIT 1
        """
        return self._fetch_one(sql, (email, login))

    def find_by_id(self, account_id: int) -> Account | None:
        return self._fetch_one(f"SELECT {_COLUMNS} FROM accounts WHERE id = %s", (account_id,))

    def create(self, email: str, login: str, name: str, password_hash: str) -> Account | None:
        """
        Insert a new account.

        Returns:
            The created account, or None if the email or login is taken
        """
        sql = f"""
            INSERT INTO accounts (email, login, name, password_hash)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT DO NOTHING
            RETURNING {_COLUMNS}
        """
        return self._fetch_one(sql, (email, login, name, password_hash))

    def update_by_id(self, account_id: int, password_hash: str) -> Account | None:
        sql = f"""
            UPDATE accounts SET password_hash = %s, updated_at = NOW()
            WHERE id = %s
            RETURNING {_COLUMNS}
        """
        return self._fetch_one(sql, (password_hash, account_id))

    def update_by_email(self, email: str, password_hash: str) -> Account | None:
        sql = f"""
            UPDATE accounts SET password_hash = %s, updated_at = NOW()
            WHERE email = %s
            RETURNING {_COLUMNS}
        """
        return self._fetch_one(sql, (password_hash, email))


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
