from enum import Enum
from typing import Any, Optional

import logging

logger = logging.getLogger(__name__)


class ErrorCode(str, Enum):
    """Standardized error codes for discovery and execution."""
    CONFIGURATION_INVALID = "CONFIGURATION_INVALID"
    CONNECTION_FAILED = "CONNECTION_FAILED"
    CATALOG_QUERY_FAILED = "CATALOG_QUERY_FAILED"
    CATALOG_ORDERING_VIOLATION = "CATALOG_ORDERING_VIOLATION"
    CATALOG_NAME_COLLISION = "CATALOG_NAME_COLLISION"
    EXECUTION_FAILED = "EXECUTION_FAILED"
    RESOURCE_RELEASE_FAILED = "RESOURCE_RELEASE_FAILED"
    SEQUENCE_CONSUMED = "SEQUENCE_CONSUMED"
    UNKNOWN_CONNECTOR = "UNKNOWN_CONNECTOR"


class FederationError(Exception):
    """Base error raised by discovery and execution.

    Attributes:
        message (str): A human-readable error message.
        error_code (ErrorCode): The standardized error code.
        datasource_id (Optional[str]): The datasource the error relates to, if known.
    """

    error_code: ErrorCode = ErrorCode.EXECUTION_FAILED

    def __init__(self, message: str, datasource_id: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.datasource_id = datasource_id

    def __str__(self) -> str:
        if self.datasource_id:
            return f"[{self.error_code.value}] {self.datasource_id}: {self.message}"
        return f"[{self.error_code.value}] {self.message}"


class ConfigurationError(FederationError):
    """A required connection property is missing or invalid."""
    error_code = ErrorCode.CONFIGURATION_INVALID


class BackendConnectionError(FederationError):
    """The backend is unreachable or its driver is unavailable."""
    error_code = ErrorCode.CONNECTION_FAILED


class CatalogQueryError(FederationError):
    """The catalog query is malformed or failed while executing."""
    error_code = ErrorCode.CATALOG_QUERY_FAILED


class CatalogOrderingError(FederationError):
    """Catalog rows were not grouped by (schema, table). Strict mode only."""
    error_code = ErrorCode.CATALOG_ORDERING_VIOLATION


class CatalogNameCollisionError(FederationError):
    """Two distinct identifiers normalised to the same schema, table or column name."""
    error_code = ErrorCode.CATALOG_NAME_COLLISION


class ExecutionError(FederationError):
    """A query failed while executing or streaming rows."""
    error_code = ErrorCode.EXECUTION_FAILED


class RowSequenceConsumedError(FederationError):
    """A row sequence was iterated a second time."""
    error_code = ErrorCode.SEQUENCE_CONSUMED


class UnknownConnectorError(FederationError):
    """No connector is registered for the requested backend type."""
    error_code = ErrorCode.UNKNOWN_CONNECTOR


class ResourceReleaseError(FederationError):
    """Closing a cursor or connection failed.

    Only ever logged by :func:`release_quietly`; never raised to callers.
    """
    error_code = ErrorCode.RESOURCE_RELEASE_FAILED


def release_quietly(resource: Any, what: str, endpoint: Optional[str] = None) -> None:
    """Closes a cursor or connection, logging instead of raising on failure.

    Args:
        resource: Anything with a ``close()`` method. ``None`` is ignored.
        what (str): Label used in the log message (e.g. "connection").
        endpoint (Optional[str]): Backend URL or datasource id for the log message.
    """
    if resource is None:
        return
    try:
        resource.close()
    except Exception as exc:
        err = ResourceReleaseError(
            f"Exception thrown while closing {what} to {endpoint or 'backend'}: {exc}"
        )
        logger.error(str(err), exc_info=exc)
