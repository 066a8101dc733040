"""Streaming group-by that folds flat catalog rows into a schema tree.

The fold is driven purely by contiguity: every run of rows sharing a
(schema, table) key becomes one table and every run sharing a schema key
becomes one schema. Rows must therefore arrive ordered by schema, then table.
That ordering is a precondition of the catalog SQL. It is only verified when
``strict_ordering`` is enabled; otherwise a key that reappears later silently
replaces the earlier group.

Distinct identifiers that normalise to the same name (``Orders`` and
``orders`` when upper-casing) always raise :class:`CatalogNameCollisionError`.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, Iterable, List, Set, Tuple

from fedsql.common.errors import CatalogNameCollisionError, CatalogOrderingError
from fedsql.sdk.models import CatalogRow, Column, Schema, SchemaCatalog, Table
from fedsql.sdk.type_map import TypeMap

logger = logging.getLogger(__name__)


class FoldState(str, Enum):
    EMPTY = "EMPTY"
    IN_TABLE = "IN_TABLE"
    FINISHED = "FINISHED"


class CatalogFolder:
    """Builds a :data:`SchemaCatalog` one catalog row at a time.

    Args:
        type_map: Resolves raw backend types to canonical types.
        case_sensitive: When False, schema, table and column names are
            upper-cased. Types are never case-normalised.
        strict_ordering: Raise :class:`CatalogOrderingError` when a schema or
            table group reappears after it was flushed.

    Raises:
        CatalogNameCollisionError: When two distinct raw identifiers normalise
            to the same schema, table or column name.
    """

    def __init__(self, type_map: TypeMap, case_sensitive: bool, strict_ordering: bool = False):
        self._type_map = type_map
        self._case_sensitive = case_sensitive
        self._strict_ordering = strict_ordering

        self._catalog: SchemaCatalog = {}
        self._state = FoldState.EMPTY
        self._schema_key: Any = None
        self._table_key: Any = None
        self._tables: Dict[str, Table] = {}
        self._columns: List[Column] = []
        # normalised name -> raw identifier it came from
        self._schema_sources: Dict[str, Any] = {}
        self._table_sources: Dict[str, Any] = {}
        self._column_sources: Dict[str, Any] = {}
        self._seen_schemas: Set[Any] = set()
        self._seen_tables: Set[Tuple[Any, Any]] = set()
        self.row_count = 0

    @property
    def state(self) -> FoldState:
        return self._state

    def add(self, row: CatalogRow) -> None:
        """Consumes one (schema, table, column, raw_type) row."""
        if self._state is FoldState.FINISHED:
            raise RuntimeError("CatalogFolder.add() called after finish()")

        schema, table, column, raw_type = row[0], row[1], row[2], row[3]

        if self._state is FoldState.EMPTY:
            self._open_schema(schema)
            self._open_table(table)
            self._state = FoldState.IN_TABLE
        elif schema != self._schema_key:
            self._flush_table()
            self._flush_schema()
            self._open_schema(schema)
            self._open_table(table)
        elif table != self._table_key:
            self._flush_table()
            self._open_table(table)

        canonical = self._type_map.resolve(raw_type)
        name = self._claim(self._column_sources, column, "column", f"{schema}.{table}")
        self._columns.append(Column(name=name, type=canonical))
        self.row_count += 1
        logger.debug(f"Adding column: {schema} : {table} : {column} : {raw_type}")

    def finish(self) -> SchemaCatalog:
        """Flushes the open groups and hands over the finished catalog."""
        if self._state is FoldState.IN_TABLE:
            self._flush_table()
            self._flush_schema()
        self._state = FoldState.FINISHED

        catalog, self._catalog = self._catalog, {}
        return catalog

    def _normalize(self, identifier: str) -> str:
        if self._case_sensitive:
            return identifier
        return identifier.upper()

    def _claim(self, sources: Dict[str, Any], raw: Any, kind: str, parent: Any = None) -> str:
        name = self._normalize(raw)
        previous = sources.get(name, raw)
        if previous != raw:
            where = f" in '{parent}'" if parent is not None else ""
            raise CatalogNameCollisionError(
                f"{kind.capitalize()} '{raw}'{where} collides with '{previous}': "
                f"both normalise to '{name}'"
            )
        sources[name] = raw
        return name

    def _open_schema(self, schema: Any) -> None:
        if self._strict_ordering and schema in self._seen_schemas:
            raise CatalogOrderingError(
                f"Schema '{schema}' reappeared after its rows were folded; "
                "catalog rows must be ordered by schema, then table"
            )
        self._schema_key = schema
        self._tables = {}
        self._table_sources = {}

    def _open_table(self, table: Any) -> None:
        key = (self._schema_key, table)
        if self._strict_ordering and key in self._seen_tables:
            raise CatalogOrderingError(
                f"Table '{self._schema_key}.{table}' reappeared after its rows were folded; "
                "catalog rows must be ordered by schema, then table"
            )
        self._table_key = table
        self._columns = []
        self._column_sources = {}

    def _flush_table(self) -> None:
        self._seen_tables.add((self._schema_key, self._table_key))
        name = self._claim(self._table_sources, self._table_key, "table", self._schema_key)
        self._tables[name] = Table(name=name, columns=tuple(self._columns))
        self._columns = []

    def _flush_schema(self) -> None:
        self._seen_schemas.add(self._schema_key)
        name = self._claim(self._schema_sources, self._schema_key, "schema")
        self._catalog[name] = Schema(name=name, tables=self._tables)
        self._tables = {}


def fold_catalog_rows(
    rows: Iterable[CatalogRow],
    type_map: TypeMap,
    case_sensitive: bool,
    strict_ordering: bool = False,
) -> SchemaCatalog:
    """Folds an iterable of catalog rows in one call."""
    folder = CatalogFolder(type_map, case_sensitive, strict_ordering)
    for row in rows:
        folder.add(row)
    return folder.finish()
