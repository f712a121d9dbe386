"""
Shared fixtures for integration tests.

PostgreSQL and Redis come from docker-compose (DATABASE_URL / REDIS_URL).
Tests needing a service are skipped when it cannot be reached.
"""

from collections.abc import Generator

import psycopg
import pytest
import redis
from psycopg_pool import ConnectionPool

from src.adapters.cache.redis_store import create_redis_client
from src.adapters.repository.postgres import create_pool, run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for integration tests, with migrations applied."""
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not reachable: {e}")

    pool = create_pool(settings.database_url, min_size=1, max_size=10, timeout_seconds=5.0)
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean accounts table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM accounts")
        conn.commit()
    yield


@pytest.fixture(scope="module")
def redis_client() -> Generator[redis.Redis, None, None]:
    """Real Redis client on the configured database."""
    settings = get_settings()
    client = create_redis_client(settings.redis_url, timeout_seconds=2.0)
    try:
        client.ping()
    except redis.ConnectionError as e:
        pytest.skip(f"Redis not reachable: {e}")
    yield client
    client.close()
