from __future__ import annotations

from importlib.metadata import entry_points
from typing import Dict, List, Optional, Type

from fedsql.common.errors import UnknownConnectorError
from fedsql.common.logger import get_logger
from fedsql.configs.datasources import DatasourceConfig
from fedsql.sdk import BackendConnector

from .mssql import MssqlConnector
from .mysql import MysqlConnector
from .postgres import PostgresConnector
from .redshift import RedshiftConnector
from .sqlite import SqliteConnector

logger = get_logger(__name__)

ENTRY_POINT_GROUP = "fedsql.connectors"

BUILTIN_CONNECTORS: Dict[str, Type[BackendConnector]] = {
    "postgres": PostgresConnector,
    "redshift": RedshiftConnector,
    "mysql": MysqlConnector,
    "mssql": MssqlConnector,
    "sqlite": SqliteConnector,
}

_ALIASES = {
    "postgresql": "postgres",
    "sqlserver": "mssql",
}


def normalize_type(name: str) -> str:
    """Normalizes backend names (e.g. 'postgresql') to registry keys."""
    key = name.strip().lower()
    return _ALIASES.get(key, key)


def discover_connectors() -> Dict[str, Type[BackendConnector]]:
    """Discovers installed connectors via 'fedsql.connectors' entry points.

    Returns:
        Dict[str, Type[BackendConnector]]: Connector type name to connector class.
    """
    connectors = {}
    for ep in entry_points(group=ENTRY_POINT_GROUP):
        try:
            connectors[normalize_type(ep.name)] = ep.load()
        except Exception as e:
            logger.error(f"Failed to load connector {ep.name}: {e}")
    return connectors


class ConnectorRegistry:
    """
    Maps backend type names to connector classes and instantiates connectors
    for configured datasources.
    """

    def __init__(
        self,
        connectors: Optional[Dict[str, Type[BackendConnector]]] = None,
        discover: bool = True,
    ):
        """
        Args:
            connectors: Extra connector classes keyed by type name. They take
                precedence over bundled and discovered ones.
            discover: Whether to load connectors from installed entry points.
        """
        self._connectors: Dict[str, Type[BackendConnector]] = dict(BUILTIN_CONNECTORS)
        if discover:
            self._connectors.update(discover_connectors())
        for name, cls in (connectors or {}).items():
            self.register(name, cls)

    def register(self, name: str, connector_cls: Type[BackendConnector]) -> None:
        self._connectors[normalize_type(name)] = connector_cls

    def available(self) -> List[str]:
        return sorted(self._connectors)

    def get(self, name: str) -> Type[BackendConnector]:
        key = normalize_type(name)
        if key not in self._connectors:
            raise UnknownConnectorError(
                f"No connector found for type '{name}'. Available: {self.available()}"
            )
        return self._connectors[key]

    def create(self, config: DatasourceConfig, strict_catalog_ordering: bool = False) -> BackendConnector:
        """
        Instantiates the connector for a datasource.

        Args:
            config: The datasource configuration.
            strict_catalog_ordering: Reject catalogs not grouped by (schema, table).

        Returns:
            BackendConnector: A connector bound to the datasource's endpoint.

        Raises:
            UnknownConnectorError: If no connector is registered for ``config.type``.
            ConfigurationError: If a connection property is missing or invalid.
        """
        try:
            connector_cls = self.get(config.type)
        except UnknownConnectorError as exc:
            exc.datasource_id = config.id
            raise
        connector = connector_cls(
            config.connection_properties(),
            datasource_id=config.id,
            strict_catalog_ordering=strict_catalog_ordering,
            case_sensitive=config.case_sensitive,
        )
        logger.info(f"Created connector {connector}")
        return connector
