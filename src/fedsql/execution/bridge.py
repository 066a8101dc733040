from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fedsql.common.errors import BackendConnectionError
from fedsql.sdk.protocols import Connection
from .data_source import SingleConnectionDataSource
from .enumerable import RowSequence, enumerate_rows

if TYPE_CHECKING:
    from fedsql.sdk.interfaces import BackendConnector

logger = logging.getLogger(__name__)


def execute(connection: Connection, sql: str) -> RowSequence:
    """Runs ``sql`` on an open connection through the generic row engine.

    The connection is wrapped so the engine can fetch it like any other data
    source. Ownership passes to the returned sequence, which closes the
    connection once it is exhausted or closed.
    """
    return enumerate_rows(SingleConnectionDataSource(connection), sql, owned_connection=connection)


def execute_query(connector: BackendConnector, sql: str) -> RowSequence:
    """Runs backend cleanup, opens a fresh connection and executes ``sql`` on it.

    Raises:
        BackendConnectionError: If cleanup failed or the connection could not be opened.
    """
    try:
        connector.cleanup()
    except Exception as exc:
        raise BackendConnectionError(
            f"Backend cleanup failed: {exc}", connector.datasource_id
        ) from exc
    try:
        connection = connector.open_connection()
    except Exception as exc:
        raise BackendConnectionError(
            f"Could not connect to backend: {exc}", connector.datasource_id
        ) from exc
    logger.debug(f"Opened connection to {connector.datasource_id} for query execution")
    return execute(connection, sql)
