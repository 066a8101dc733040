from typing import Any, Dict, Mapping, Optional

import logging

from sqlalchemy import Engine, create_engine
from sqlalchemy.engine import URL, make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.pool import NullPool

from fedsql.common.errors import ConfigurationError
from fedsql.sdk import BackendConnector, Connection, TypeMap

logger = logging.getLogger(__name__)


class SQLAlchemyConnector(BackendConnector):
    """
    Base class for all SQLAlchemy-based connectors.
    Implements connection handling; subclasses declare the catalog query,
    the type patterns and the case policy of their backend.
    """

    #: Four columns (schema, table, column, raw type) ordered by schema, then table.
    catalog_query: str = ""
    #: Ordered regex -> canonical type. First full match wins.
    data_types: Dict[str, str] = {}
    case_sensitive: bool = False

    def __init__(
        self,
        properties: Mapping[str, Any],
        datasource_id: Optional[str] = None,
        strict_catalog_ordering: bool = False,
        case_sensitive: Optional[bool] = None,
        engine_options: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(properties, datasource_id, strict_catalog_ordering, case_sensitive)
        try:
            self._url = make_url(self.endpoint.url)
        except ArgumentError as exc:
            raise ConfigurationError(
                f"Invalid backend url '{self.endpoint.url}': {exc}", datasource_id
            ) from exc
        self._type_map = TypeMap(self.data_types)
        self._engine_options = dict(engine_options or {})
        self._engine: Optional[Engine] = None

    def catalog_sql(self) -> str:
        return self.catalog_query

    def type_map(self) -> TypeMap:
        return self._type_map

    def is_case_sensitive(self) -> bool:
        return self.case_sensitive

    def build_url(self) -> URL:
        """Endpoint URL with the configured credentials applied."""
        credentials = {}
        if self.endpoint.username:
            credentials["username"] = self.endpoint.username
        password = self.endpoint.password.get_secret_value()
        if password:
            credentials["password"] = password
        return self._url.set(**credentials)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            # NullPool: connections are opened on demand and really closed on release
            self._engine = create_engine(self.build_url(), poolclass=NullPool, **self._engine_options)
            logger.debug(f"Created engine for {self}")
        return self._engine

    def open_connection(self) -> Connection:
        return self.engine.connect()

    def cleanup(self) -> None:
        """Disposes the engine so the next execution builds it from scratch."""
        if self._engine is not None:
            logger.debug(f"Disposing engine for {self}")
            self._engine.dispose()
            self._engine = None
