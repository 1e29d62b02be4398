"""Postgres connection pool lifecycle shared by the service applications."""

from __future__ import annotations

import logging
from typing import Iterable

from psycopg_pool import ConnectionPool

logger = logging.getLogger(__name__)


def open_pool(database_url: str) -> ConnectionPool:
    """Create and open a connection pool for ``database_url``."""
    pool = ConnectionPool(database_url, open=False)
    pool.open()
    return pool


def close_pool(pool: ConnectionPool) -> None:
    pool.close()
    pool.wait_close()


def apply_schema(pool: ConnectionPool, statements: Iterable[str]) -> None:
    """Run idempotent DDL statements in a single transaction."""
    with pool.connection() as conn:
        with conn.cursor() as cur:
            for statement in statements:
                cur.execute(statement)
        conn.commit()
    logger.info("schema ensured")
