"""Shared errors, logging and settings."""
from fedsql.common.errors import (
    ErrorCode,
    FederationError,
    ConfigurationError,
    BackendConnectionError,
    CatalogQueryError,
    CatalogOrderingError,
    CatalogNameCollisionError,
    ExecutionError,
    RowSequenceConsumedError,
    ResourceReleaseError,
    UnknownConnectorError,
    release_quietly,
)

__all__ = [
    "ErrorCode",
    "FederationError",
    "ConfigurationError",
    "BackendConnectionError",
    "CatalogQueryError",
    "CatalogOrderingError",
    "CatalogNameCollisionError",
    "ExecutionError",
    "RowSequenceConsumedError",
    "ResourceReleaseError",
    "UnknownConnectorError",
    "release_quietly",
]
