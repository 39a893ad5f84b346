"""
Fixtures for tests against a real PostgreSQL database.

The database comes from DATABASE_URL (see src.config.settings).
Tests that request ``pool`` are skipped when it cannot be reached.
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="session")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool and apply migrations once per session."""
    settings = get_settings()
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=1,
        max_size=10,
        open=True,
    )
    try:
        pool.wait(timeout=3.0)
    except PoolTimeout:
        pool.close()
        pytest.skip("PostgreSQL not reachable at DATABASE_URL")
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Empty registry tables before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM administrators")
        conn.execute("DELETE FROM users")
        conn.execute("DELETE FROM safe_houses")
        conn.commit()
    yield
