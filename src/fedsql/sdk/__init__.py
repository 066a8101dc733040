from .models import (
    BackendEndpoint,
    CatalogRow,
    Column,
    Table,
    Schema,
    SchemaCatalog,
)
from .type_map import TypeMap, CanonicalType
from .protocols import Connection, ConnectionFactory, DataSource, ResultCursor
from .interfaces import BackendConnector

__all__ = [
    "BackendConnector",
    "BackendEndpoint",
    "CatalogRow",
    "Column",
    "Table",
    "Schema",
    "SchemaCatalog",
    "TypeMap",
    "CanonicalType",
    "Connection",
    "ConnectionFactory",
    "DataSource",
    "ResultCursor",
]
