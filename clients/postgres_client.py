"""
Postgres access for the todo API.

One psycopg2 ThreadedConnectionPool per database URL, shared by every
PostgresClient pointed at that URL. Rows come back as plain dicts. Queries
carry their owner scoping explicitly; nothing here knows about users.
"""

import logging
import threading
from contextlib import contextmanager
from typing import Any, Dict, List, Tuple
from uuid import UUID

import psycopg2
import psycopg2.extras
import psycopg2.pool

logger = logging.getLogger(__name__)

Params = Tuple | Dict | None


def _adapt(value: Any) -> Any:
    """psycopg2 has no UUID adapter registered by default: send them as text."""
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, (list, tuple)):
        return type(value)(_adapt(v) for v in value)
    if isinstance(value, dict):
        return {k: _adapt(v) for k, v in value.items()}
    return value


class PostgresClient:
    """
    Thin query helper over a pooled connection.

    Usage:
        db = PostgresClient(database_url)
        rows = db.execute("SELECT * FROM tasks WHERE user_id = %s", (user_id,))
    """

    _pools: Dict[str, psycopg2.pool.ThreadedConnectionPool] = {}
    _lock = threading.RLock()

    def __init__(self, database_url: str, min_connections: int = 2, max_connections: int = 20):
        self._url = database_url
        self._min_connections = min_connections
        self._max_connections = max_connections
        self._pool()

    def _pool(self) -> psycopg2.pool.ThreadedConnectionPool:
        with self._lock:
            pool = self._pools.get(self._url)
            if pool is None:
                pool = psycopg2.pool.ThreadedConnectionPool(
                    minconn=self._min_connections,
                    maxconn=self._max_connections,
                    dsn=self._url,
                    connect_timeout=30,
                )
                self._pools[self._url] = pool
                logger.info(f"Postgres pool opened ({self._min_connections}-{self._max_connections} connections)")
            return pool

    @contextmanager
    def get_connection(self):
        """Borrow a pooled connection. Rolled back if the block raises."""
        pool = self._pool()
        conn = pool.getconn()
        if conn is None:
            raise RuntimeError("Connection pool returned no connection")
        try:
            yield conn
        except Exception:
            conn.rollback()
            raise
        finally:
            pool.putconn(conn)

    @contextmanager
    def _cursor(self, query: str, params: Params, as_dicts: bool = True):
        """Run one statement and commit once the caller has read the results."""
        factory = psycopg2.extras.RealDictCursor if as_dicts else None
        with self.get_connection() as conn:
            with conn.cursor(cursor_factory=factory) as cur:
                cur.execute(query, _adapt(params))
                yield cur
            conn.commit()

    def execute(self, query: str, params: Params = None) -> List[Dict[str, Any]]:
        """All rows as dicts; [] for statements that return nothing."""
        with self._cursor(query, params) as cur:
            rows = [dict(row) for row in cur.fetchall()] if cur.description else []
        return rows

    def execute_single(self, query: str, params: Params = None) -> Dict[str, Any] | None:
        rows = self.execute(query, params)
        return rows[0] if rows else None

    def execute_scalar(self, query: str, params: Params = None) -> Any:
        """First column of the first row, e.g. a count."""
        with self._cursor(query, params, as_dicts=False) as cur:
            row = cur.fetchone()
        return row[0] if row else None

    def execute_returning(self, query: str, params: Params = None) -> List[Dict[str, Any]]:
        """INSERT/UPDATE/DELETE ... RETURNING. Empty when no row matched."""
        with self._cursor(query, params) as cur:
            rows = [dict(row) for row in cur.fetchall()]
        return rows

    def close(self) -> None:
        with self._lock:
            pool = self._pools.pop(self._url, None)
            if pool is not None:
                pool.closeall()
                logger.info("Postgres pool closed")

    @classmethod
    def close_all_pools(cls) -> None:
        with cls._lock:
            for pool in cls._pools.values():
                pool.closeall()
            cls._pools.clear()
