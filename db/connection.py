"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's connection pools for efficient connection reuse.

Repositories may be handed their own pool (anything exposing
``getconn()`` / ``putconn(conn)``); otherwise they fall back to the
process-wide pool created by ``init_pool()``.
"""

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MAX, DB_POOL_MIN
from db.errors import DatabaseConnectionError
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.AbstractConnectionPool | None = None


def init_pool(
    min_conn: int = DB_POOL_MIN,
    max_conn: int = DB_POOL_MAX,
    dsn: str = DATABASE_URL,
    threaded: bool = False,
) -> pool.AbstractConnectionPool:
    """
    Initialize the process-wide connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: libpq connection string; defaults to ``config.DATABASE_URL``.
        threaded: Use ThreadedConnectionPool for multi-threaded callers.

    Returns:
        The initialized pool.

    Raises:
        DatabaseConnectionError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return _pool
    pool_cls = pool.ThreadedConnectionPool if threaded else pool.SimpleConnectionPool
    try:
        _pool = pool_cls(min_conn, max_conn, dsn)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise DatabaseConnectionError(str(e).strip(), "init_pool") from e
    return _pool


def get_pool() -> pool.AbstractConnectionPool:
    """
    Return the process-wide pool.

    Raises:
        DatabaseConnectionError: If the pool has not been initialized.
    """
    if _pool is None:
        raise DatabaseConnectionError(
            "Database pool not initialized. Call init_pool() first."
        )
    return _pool


def get_connection(conn_pool=None):
    """
    Get a connection from the given pool, or from the process-wide one.

    Returns:
        A psycopg2 connection object.

    Raises:
        DatabaseConnectionError: If no pool is available or it is exhausted.
    """
    source = conn_pool if conn_pool is not None else get_pool()
    try:
        return source.getconn()
    except psycopg2.Error as e:
        logger.error(f"Failed to get a connection from the pool: {e}")
        raise DatabaseConnectionError(str(e).strip(), "get_connection") from e


def release_connection(conn, conn_pool=None) -> None:
    """
    Return a connection back to the pool it came from.

    Args:
        conn: The psycopg2 connection to release.
        conn_pool: The pool passed to ``get_connection``, if any.
    """
    source = conn_pool if conn_pool is not None else _pool
    if source is not None:
        source.putconn(conn)


def close_pool() -> None:
    """Close all connections in the process-wide pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("Database connection pool closed.")
