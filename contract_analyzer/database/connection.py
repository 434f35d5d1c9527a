from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg_pool import ConnectionPool

from contract_analyzer.config.settings import Settings
from contract_analyzer.logging.logger import Log


class Database:
    """Owns the PostgreSQL connection pool for the life of the process.

    Constructed once at startup, opened by the application lifespan, and
    passed to repositories explicitly.
    """

    def __init__(self, settings: Settings) -> None:
        self._conninfo = settings.conninfo
        self._max_size = settings.db_pool_max_size
        self._pool: ConnectionPool | None = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    def open(self) -> None:
        """Create the pool. Idempotent."""
        if self._pool is not None:
            return
        self._pool = ConnectionPool(
            self._conninfo, min_size=1, max_size=self._max_size, open=True
        )
        Log.info("Database connection pool opened")

    def close(self) -> None:
        """Close the pool. Idempotent."""
        if self._pool is not None:
            self._pool.close()
            self._pool = None
            Log.info("Database connection pool closed")

    @contextmanager
    def connection(self) -> Generator[psycopg.Connection[Any], None, None]:
        """Yield a connection from the pool. Caller manages commit/rollback."""
        if self._pool is None:
            raise RuntimeError("Database pool not open. Call Database.open() first.")
        with self._pool.connection() as conn:
            yield conn

    def status(self) -> str:
        """Report 'connected', 'disconnected' or 'error' for health checks."""
        if self._pool is None:
            return "disconnected"
        try:
            with self._pool.connection(timeout=2.0) as conn:
                conn.execute("SELECT 1")
        except Exception as exc:
            Log.warning(f"Database health check failed: {exc}")
            return "error"
        return "connected"
