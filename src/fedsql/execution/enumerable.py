"""Generic row engine: runs SQL against a data source and streams the rows.

The engine knows nothing about concrete backends. It asks its data source for
a connection the first time a row is requested, executes the statement and
hands rows out one at a time.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Iterator, Optional, Tuple

from sqlalchemy import text

from fedsql.common.errors import ExecutionError, RowSequenceConsumedError, release_quietly
from fedsql.common.logger import current_datasource, datasource_context
from fedsql.sdk.protocols import Connection, DataSource, ResultCursor

logger = logging.getLogger(__name__)

Row = Tuple[Any, ...]


class ExecutionState(str, Enum):
    IDLE = "IDLE"
    OPENED = "OPENED"
    STREAMING = "STREAMING"
    CLOSED = "CLOSED"


class RowSequence(Iterator[Row]):
    """Lazy, forward-only, single-pass sequence of result rows.

    Nothing touches the backend until the first row is requested. Rows come
    back as tuples in cursor order. The cursor and connection are released
    exactly once, when the rows run out, when fetching fails, or when
    :meth:`close` is called. After that the sequence stays exhausted.

    The sequence can be iterated only once: a second ``iter()`` raises
    :class:`RowSequenceConsumedError` rather than restarting the query. It is
    not safe to consume from more than one thread. There is no cancellation;
    stop early by calling :meth:`close` (or leaving a ``with`` block).

    Args:
        data_source: Supplies the connection on first use.
        sql: Statement to execute.
        owned_connection: A connection the sequence must close even if it is
            closed before the first row is requested.
    """

    def __init__(self, data_source: DataSource, sql: str, owned_connection: Optional[Connection] = None):
        self._data_source = data_source
        self._sql = sql
        self._owned_connection = owned_connection
        self._connection: Optional[Connection] = None
        self._cursor: Optional[ResultCursor] = None
        self._rows: Optional[Iterator[Any]] = None
        self._state = ExecutionState.IDLE
        self._iterated = False
        self._datasource_id = current_datasource()
        self.rows_read = 0

    @property
    def state(self) -> ExecutionState:
        return self._state

    @property
    def sql(self) -> str:
        return self._sql

    def __iter__(self) -> "RowSequence":
        if self._iterated:
            raise RowSequenceConsumedError(
                "RowSequence is single-pass; execute the query again to re-read its rows",
                self._datasource_id,
            )
        self._iterated = True
        return self

    def __next__(self) -> Row:
        if self._state is ExecutionState.CLOSED:
            raise StopIteration

        with datasource_context(self._datasource_id):
            if self._state is ExecutionState.IDLE:
                self._open()
            try:
                row = next(self._rows)
            except StopIteration:
                logger.debug(f"Result exhausted after {self.rows_read} rows")
                self.close()
                raise
            except Exception as exc:
                self.close()
                raise ExecutionError(f"Failed to fetch row: {exc}", self._datasource_id) from exc

        self._state = ExecutionState.STREAMING
        self.rows_read += 1
        return tuple(row)

    def _open(self) -> None:
        try:
            self._connection = self._data_source.get_connection()
            self._state = ExecutionState.OPENED
            logger.info(f"Executing query: {self._sql[:300]}")
            self._cursor = self._connection.execute(text(self._sql))
            self._rows = iter(self._cursor)
        except Exception as exc:
            self.close()
            raise ExecutionError(f"Query execution failed: {exc}", self._datasource_id) from exc

    def close(self) -> None:
        """Releases the cursor and then the connection. Safe to call repeatedly."""
        if self._state is ExecutionState.CLOSED:
            return
        self._state = ExecutionState.CLOSED

        cursor, self._cursor = self._cursor, None
        connection = self._connection if self._connection is not None else self._owned_connection
        self._connection = self._owned_connection = None
        self._rows = None

        release_quietly(cursor, "result cursor", self._datasource_id)
        release_quietly(connection, "connection", self._datasource_id)

    def __enter__(self) -> "RowSequence":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def enumerate_rows(data_source: DataSource, sql: str, owned_connection: Optional[Connection] = None) -> RowSequence:
    """Engine entry point: a lazy row sequence for ``sql`` over ``data_source``."""
    return RowSequence(data_source, sql, owned_connection=owned_connection)
