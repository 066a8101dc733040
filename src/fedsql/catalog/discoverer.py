from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import text

from fedsql.common.errors import (
    BackendConnectionError,
    CatalogQueryError,
    FederationError,
    release_quietly,
)
from fedsql.common.logger import current_datasource
from fedsql.sdk.models import SchemaCatalog
from fedsql.sdk.protocols import ConnectionFactory
from fedsql.sdk.type_map import TypeMap
from .folder import CatalogFolder

logger = logging.getLogger(__name__)


def discover(
    connect: ConnectionFactory,
    catalog_sql: str,
    type_map: TypeMap,
    case_sensitive: bool,
    *,
    strict_ordering: bool = False,
    endpoint: Optional[str] = None,
) -> SchemaCatalog:
    """Runs one catalog query and folds its rows into a schema -> table -> column tree.

    The catalog SQL must return four columns (schema, table, column, raw type)
    ordered by schema, then table. Discovery is all-or-nothing: a partial
    catalog is never returned.

    Args:
        connect: Opens a new connection. It is closed before this function returns.
        catalog_sql: Backend-specific catalog query.
        type_map: Maps raw backend types to canonical types.
        case_sensitive: When False, identifiers are upper-cased.
        strict_ordering: Reject catalog rows that are not grouped by (schema, table).
        endpoint: Label for log and error messages.

    Returns:
        SchemaCatalog: Mapping of schema name to Schema. Empty if the query returned no rows.

    Raises:
        BackendConnectionError: If no connection could be opened.
        CatalogQueryError: If the catalog query failed to execute or fetch.
        CatalogOrderingError: In strict mode, if the rows are not grouped.
    """
    endpoint = endpoint or current_datasource()
    connection = None
    cursor = None
    try:
        try:
            connection = connect()
        except Exception as exc:
            raise BackendConnectionError(
                f"Could not connect to backend: {exc}", endpoint
            ) from exc

        logger.info(f"Running catalog query against {endpoint or 'backend'}")
        folder = CatalogFolder(type_map, case_sensitive, strict_ordering)
        try:
            cursor = connection.execute(text(catalog_sql))
            for row in cursor:
                folder.add(row)
        except FederationError:
            raise
        except Exception as exc:
            raise CatalogQueryError(f"Catalog query failed: {exc}", endpoint) from exc

        catalog = folder.finish()
        logger.info(
            f"Discovered {len(catalog)} schemas, "
            f"{sum(len(s.tables) for s in catalog.values())} tables, "
            f"{folder.row_count} columns from {endpoint or 'backend'}"
        )
        return catalog
    finally:
        release_quietly(cursor, "catalog cursor", endpoint)
        release_quietly(connection, "connection", endpoint)
