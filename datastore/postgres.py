"""PostgreSQL-backed reading store using a pooled psycopg2 connection."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from threading import BoundedSemaphore, Lock
from typing import Any, Callable, Iterator, List, Optional, Tuple

import psycopg2
from psycopg2 import sql
from psycopg2.extras import RealDictCursor
from psycopg2.pool import ThreadedConnectionPool

from datastore.base import StoreError
from datastore.query import ReadingQuery, SortOrder
from models.records import (
    CHANNEL_COLUMN,
    STATION_COLUMN,
    TIMESTAMP_COLUMN,
    Reading,
)

logger = logging.getLogger(__name__)

PoolFactory = Callable[[], ThreadedConnectionPool]

_STATION = sql.Identifier(STATION_COLUMN)
_CHANNEL = sql.Identifier(CHANNEL_COLUMN)
_TIMESTAMP = sql.Identifier(TIMESTAMP_COLUMN)


class PostgresReadingStore:
    """Reads GNSS rows from a single table.

    The connection pool is opened on first use and every query borrows one
    connection for its duration. Once ``max_connections`` are checked out,
    further callers wait for one to be returned. Driver and pool errors are
    re-raised as :class:`StoreError`. Rows sharing the latest timestamp are
    resolved by physical row order (``ctid``).
    """

    def __init__(
        self,
        pool_factory: PoolFactory,
        table_name: str = "gnss",
        max_connections: int = 10,
    ) -> None:
        self.table_name = table_name
        self._slots = BoundedSemaphore(max_connections)
        self._pool_factory = pool_factory
        self._pool: Optional[ThreadedConnectionPool] = None
        self._pool_lock = Lock()
        self._table = sql.Identifier(table_name)

    def fetch(self, query: ReadingQuery) -> List[Reading]:
        statement, params = self.render(query)
        rows = self._execute(statement, params)
        return [Reading.from_row(row) for row in rows]

    def distinct_station_ids(self) -> List[str]:
        statement = sql.SQL("SELECT DISTINCT {station} FROM {table} ORDER BY {station}").format(
            station=_STATION,
            table=self._table,
        )
        rows = self._execute(statement, [])
        return [row[STATION_COLUMN] for row in rows]

    def distinct_channel_ids(self, station_id: str) -> List[str]:
        statement = sql.SQL(
            "SELECT DISTINCT {channel} FROM {table} WHERE {station} = %s ORDER BY {channel}"
        ).format(channel=_CHANNEL, station=_STATION, table=self._table)
        rows = self._execute(statement, [station_id])
        return [row[CHANNEL_COLUMN] for row in rows]

    def close(self) -> None:
        with self._pool_lock:
            pool, self._pool = self._pool, None
        if pool is not None and not pool.closed:
            pool.closeall()
            logger.info("Closed connection pool", extra={"table": self.table_name})

    def render(self, query: ReadingQuery) -> Tuple[sql.Composed, List[Any]]:
        """Compose the SQL statement and its positional parameters for ``query``."""
        clauses: List[sql.Composable] = []
        params: List[Any] = []

        if query.station_ids is not None:
            clauses.append(sql.SQL("{} = ANY(%s)").format(_STATION))
            params.append(list(query.station_ids))
        if query.channel_ids is not None:
            clauses.append(sql.SQL("{} = ANY(%s)").format(_CHANNEL))
            params.append(list(query.channel_ids))
        if query.start is not None:
            clauses.append(sql.SQL("{} >= %s").format(_TIMESTAMP))
            params.append(query.start)
        if query.end is not None:
            clauses.append(sql.SQL("{} <= %s").format(_TIMESTAMP))
            params.append(query.end)

        if query.latest_only:
            head = sql.SQL("SELECT DISTINCT ON ({station}, {channel}) * FROM {table}").format(
                station=_STATION,
                channel=_CHANNEL,
                table=self._table,
            )
            tail = sql.SQL("ORDER BY {station}, {channel}, {timestamp} DESC, ctid").format(
                station=_STATION,
                channel=_CHANNEL,
                timestamp=_TIMESTAMP,
            )
        else:
            head = sql.SQL("SELECT * FROM {table}").format(table=self._table)
            direction = sql.SQL("DESC" if query.order is SortOrder.desc else "ASC")
            tail = sql.SQL("ORDER BY {timestamp} {direction}").format(
                timestamp=_TIMESTAMP,
                direction=direction,
            )

        parts: List[sql.Composable] = [head]
        if clauses:
            parts.append(sql.SQL("WHERE ") + sql.SQL(" AND ").join(clauses))
        parts.append(tail)
        return sql.SQL(" ").join(parts), params

    @contextmanager
    def _connection(self) -> Iterator[Any]:
        pool = self._get_pool()
        # psycopg2 pools raise instead of blocking when exhausted.
        self._slots.acquire()
        try:
            conn = pool.getconn()
            broken = False
            try:
                yield conn
            except psycopg2.Error:
                broken = True
                raise
            finally:
                pool.putconn(conn, close=broken)
        finally:
            self._slots.release()

    def _execute(self, statement: sql.Composable, params: List[Any]) -> List[dict]:
        try:
            with self._connection() as conn:
                with conn.cursor(cursor_factory=RealDictCursor) as cur:
                    cur.execute(statement, params)
                    rows = cur.fetchall()
                # Reads only; end the implicit transaction before release.
                conn.rollback()
        except psycopg2.Error as exc:
            raise StoreError(f"Query against {self.table_name!r} failed") from exc
        logger.debug(
            "Query returned rows",
            extra={"row_count": len(rows), "table": self.table_name},
        )
        return rows

    def _get_pool(self) -> ThreadedConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                try:
                    self._pool = self._pool_factory()
                except psycopg2.Error as exc:
                    raise StoreError("Could not open the connection pool") from exc
                logger.info("Opened connection pool", extra={"table": self.table_name})
            return self._pool


def build_pool_factory(
    host: str,
    port: int,
    database: str,
    user: str,
    password: str,
    min_size: int = 1,
    max_size: int = 10,
) -> PoolFactory:
    def factory() -> ThreadedConnectionPool:
        return ThreadedConnectionPool(
            min_size,
            max_size,
            host=host,
            port=port,
            dbname=database,
            user=user,
            password=password,
        )

    return factory
