"""
PostgreSQL key-value adapter - Implements KeyValueStore protocol.

This module provides the PostgreSQL implementation of the domain's
key-value port using psycopg3 with raw SQL.

Entries live in a single ``kv_entries`` table keyed by
``(namespace, key)``. The primary key makes ``put_if_absent`` atomic:
``INSERT ... ON CONFLICT DO NOTHING`` writes at most one row per key
no matter how many requests race for it.
"""

import logging
from pathlib import Path

from psycopg_pool import ConnectionPool

logger = logging.getLogger(__name__)


class PostgresKeyValueStore:
    """
    Implements KeyValueStore protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool, namespace: str) -> None:
        """
        Initialize store with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            namespace: Namespace all keys of this store belong to
        """
        self._pool = pool
        self.namespace = namespace

    def get(self, key: str) -> str | None:
        sql = "SELECT value FROM kv_entries WHERE namespace = %s AND key = %s"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (self.namespace, key))
            row = cursor.fetchone()
        return row[0] if row is not None else None

    def put(self, key: str, value: str) -> None:
        sql = """
            INSERT INTO kv_entries (namespace, key, value)
            VALUES (%s, %s, %s)
            ON CONFLICT (namespace, key) DO UPDATE
            SET value = EXCLUDED.value,
                updated_at = NOW()
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (self.namespace, key, value))
            conn.commit()

    def put_if_absent(self, key: str, value: str) -> bool:
        """
        Atomically write a value only if the key does not exist yet.

        The primary key on (namespace, key) ensures that concurrent
        writers for the same key produce exactly one row.

        Returns:
            True if the row was inserted, False if the key already existed
        """
        sql = """
            INSERT INTO kv_entries (namespace, key, value)
            VALUES (%s, %s, %s)
            ON CONFLICT (namespace, key) DO NOTHING
        """

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(sql, (self.namespace, key, value))
            conn.commit()
            return cursor.rowcount == 1

    def check_connection(self) -> None:
        """Raise if the database is unreachable."""
        with self._pool.connection() as conn:
            conn.execute("SELECT 1")


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/kv/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning(f"Migrations directory not found: {migrations_dir}")
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info(f"Running {len(sql_files)} migration(s)")

    for sql_file in sql_files:
        logger.info(f"Executing migration: {sql_file.name}")
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info(f"Migration complete: {sql_file.name}")
        except Exception as e:
            logger.error(f"Migration failed: {sql_file.name} - {e}")
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
