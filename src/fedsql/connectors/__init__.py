"""Bundled SQLAlchemy connectors and the connector registry."""
from .base import SQLAlchemyConnector
from .postgres import PostgresConnector
from .redshift import RedshiftConnector
from .mysql import MysqlConnector
from .mssql import MssqlConnector
from .sqlite import SqliteConnector
from .registry import BUILTIN_CONNECTORS, ConnectorRegistry, discover_connectors

__all__ = [
    "SQLAlchemyConnector",
    "PostgresConnector",
    "RedshiftConnector",
    "MysqlConnector",
    "MssqlConnector",
    "SqliteConnector",
    "BUILTIN_CONNECTORS",
    "ConnectorRegistry",
    "discover_connectors",
]
