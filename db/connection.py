"""
db/connection.py
----------------
Manages the PostgreSQL connection pool.
Uses psycopg2's ThreadedConnectionPool so request threads can share it.
The pool itself refuses checkouts once every connection is in use, so a
semaphore sized to the pool makes callers wait for a free connection
(up to DB_POOL_TIMEOUT seconds) instead.

`Database` is the default store handle handed to the repositories: each
`cursor()` block runs standalone on its own pooled connection and is
committed (or rolled back) when the block ends.
"""

import threading
from contextlib import contextmanager
from typing import Iterator

import psycopg2
from psycopg2 import pool, extras

from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX, DB_POOL_TIMEOUT
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.ThreadedConnectionPool | None = None
_slots: threading.BoundedSemaphore | None = None

# uuid.UUID values are passed straight to the driver as query parameters.
extras.register_uuid()


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX, dsn: str = DATABASE_URL) -> None:
    """
    Initialize the database connection pool.

    Args:
        min_conn: Minimum number of connections to keep open.
        max_conn: Maximum number of connections allowed.
        dsn: Connection string; defaults to the configured DATABASE_URL.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool, _slots
    if _pool is not None:
        return
    try:
        _pool = pool.ThreadedConnectionPool(min_conn, max_conn, dsn)
        _slots = threading.BoundedSemaphore(max_conn)
        logger.info("Database connection pool initialized successfully.")
    except psycopg2.OperationalError as e:
        logger.error(f"Failed to initialize database pool: {e}")
        raise


def get_connection(timeout: float = DB_POOL_TIMEOUT):
    """
    Get a connection from the pool, waiting while all of them are in use.

    Args:
        timeout: Seconds to wait for a free connection.

    Returns:
        A psycopg2 connection object.

    Raises:
        RuntimeError: If the pool has not been initialized.
        psycopg2.pool.PoolError: If no connection freed up within `timeout`.
    """
    if _pool is None or _slots is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    if not _slots.acquire(timeout=timeout):
        raise pool.PoolError(f"no free connection after {timeout}s")
    try:
        return _pool.getconn()
    except BaseException:
        _slots.release()
        raise


def release_connection(conn) -> None:
    """
    Return a connection back to the pool.

    Args:
        conn: The psycopg2 connection to release.
    """
    if _pool is not None:
        try:
            _pool.putconn(conn)
        finally:
            _slots.release()


def close_pool() -> None:
    """Close all connections in the pool."""
    global _pool, _slots
    if _pool is not None:
        _pool.closeall()
        _pool = None
        _slots = None
        logger.info("Database connection pool closed.")


class Database:
    """
    Default store handle backed by the process-wide pool.

    The acquire/release callables are injectable so tests can hand out
    fake connections without a running PostgreSQL.
    """

    def __init__(self, acquire=get_connection, release=release_connection):
        self._acquire = acquire
        self._release = release

    def acquire(self):
        """Check out a connection. The caller must hand it back via `release`."""
        return self._acquire()

    def release(self, conn) -> None:
        self._release(conn)

    @contextmanager
    def cursor(self) -> Iterator:
        """
        Yield a cursor on a fresh connection and finish the unit of work.

        Commits when the block exits normally, rolls back on any
        exception (which is re-raised), always returns the connection.
        """
        conn = self.acquire()
        try:
            with conn.cursor() as cur:
                yield cur
            conn.commit()
        except BaseException:
            conn.rollback()
            raise
        finally:
            self.release(conn)
