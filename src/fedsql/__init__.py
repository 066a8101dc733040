"""Federated metadata discovery and query execution over SQL backends."""
from fedsql.common.errors import ErrorCode, FederationError
from fedsql.sdk import BackendConnector, Column, Schema, SchemaCatalog, Table, TypeMap
from fedsql.catalog import discover
from fedsql.execution import RowSequence, execute, execute_query
from fedsql.configs import DatasourceConfig, load_datasources
from fedsql.connectors import ConnectorRegistry

__version__ = "0.1.0"

__all__ = [
    "ErrorCode",
    "FederationError",
    "BackendConnector",
    "Column",
    "Schema",
    "SchemaCatalog",
    "Table",
    "TypeMap",
    "discover",
    "RowSequence",
    "execute",
    "execute_query",
    "DatasourceConfig",
    "load_datasources",
    "ConnectorRegistry",
]
