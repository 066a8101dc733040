from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Mapping, Optional

from fedsql.common.logger import datasource_context
from .models import BackendEndpoint, SchemaCatalog
from .protocols import Connection
from .type_map import TypeMap

if TYPE_CHECKING:
    from fedsql.execution.enumerable import RowSequence


class BackendConnector(ABC):
    """Canonical interface every backend connector must implement.

    Concrete connectors supply the catalog SQL, the type map and a way to open
    a connection. Discovery and execution are implemented here once, so callers
    never depend on a concrete backend.
    """

    def __init__(
        self,
        properties: Mapping[str, Any],
        datasource_id: Optional[str] = None,
        strict_catalog_ordering: bool = False,
        case_sensitive: Optional[bool] = None,
    ):
        self._datasource_id = datasource_id
        self._endpoint = BackendEndpoint.from_properties(properties, datasource_id)
        self.strict_catalog_ordering = strict_catalog_ordering
        # per-datasource override of is_case_sensitive()
        self.case_sensitive_override = case_sensitive

    def __str__(self):
        return f"{self.datasource_id} ({type(self).__name__})"

    @property
    def datasource_id(self) -> str:
        """Unique identifier for this datasource instance."""
        return self._datasource_id or self._endpoint.url

    @property
    def endpoint(self) -> BackendEndpoint:
        return self._endpoint

    @abstractmethod
    def catalog_sql(self) -> str:
        """SQL returning (schema, table, column, type) rows ordered by schema, then table."""
        pass

    @abstractmethod
    def type_map(self) -> TypeMap:
        """Ordered backend type pattern -> canonical type mapping."""
        pass

    @abstractmethod
    def open_connection(self) -> Connection:
        """Open a new connection owned by the caller."""
        pass

    def is_case_sensitive(self) -> bool:
        """Whether identifiers keep their backend casing. Otherwise they are upper-cased."""
        return False

    def identifiers_case_sensitive(self) -> bool:
        if self.case_sensitive_override is not None:
            return self.case_sensitive_override
        return self.is_case_sensitive()

    def cleanup(self) -> None:
        """Release backend state left over from earlier executions. No-op by default."""

    def get_schemas(self) -> SchemaCatalog:
        """Discover the backend's schema -> table -> column catalog."""
        from fedsql.catalog.discoverer import discover

        with datasource_context(self.datasource_id):
            return discover(
                self.open_connection,
                self.catalog_sql(),
                self.type_map(),
                self.identifiers_case_sensitive(),
                strict_ordering=self.strict_catalog_ordering,
                endpoint=self.datasource_id,
            )

    def execute(self, connection: Connection, sql: str) -> RowSequence:
        """Run SQL on an already open connection. The sequence takes ownership of it."""
        from fedsql.execution import bridge

        with datasource_context(self.datasource_id):
            return bridge.execute(connection, sql)

    def execute_query(self, sql: str) -> RowSequence:
        """Run backend cleanup, open a fresh connection and run SQL on it."""
        from fedsql.execution import bridge

        with datasource_context(self.datasource_id):
            return bridge.execute_query(self, sql)
