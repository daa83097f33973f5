"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- PostgreSQL connection pool (skips when the database is unreachable)
- Per-test cleanup of the kv_entries table
"""

from collections.abc import Generator

import pytest
from psycopg_pool import ConnectionPool, PoolTimeout

from src.adapters.kv.postgres import run_migrations
from src.config.settings import get_settings


@pytest.fixture(scope="module")
def pool() -> Generator[ConnectionPool, None, None]:
    """Create connection pool for tests that need PostgreSQL."""
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
        pytest.skip(f"PostgreSQL not reachable at {settings.database_url}")

    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pool: ConnectionPool) -> Generator[None, None, None]:
    """Clean kv_entries table before each test."""
    with pool.connection() as conn:
        conn.execute("DELETE FROM kv_entries")
        conn.commit()
    yield
