from typing import Any, Dict, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from fedsql.common.errors import ConfigurationError

# schema, table, column, raw type -- in catalog query order
CatalogRow = Tuple[Any, Any, Any, Any]

_REQUIRED_PROPERTIES = {
    "url": 'Field "url" specifying the backend endpoint needs to be defined for the datasource',
    "username": 'Field "username" specifying username needs to be defined for the datasource',
    "password": 'Field "password" specifying password needs to be defined for the datasource',
}


class BackendEndpoint(BaseModel):
    """Connection coordinates of a single backend. Immutable once validated."""

    url: str
    username: str
    password: SecretStr

    model_config = ConfigDict(frozen=True, extra="ignore")

    @classmethod
    def from_properties(
        cls, properties: Mapping[str, Any], datasource_id: Optional[str] = None
    ) -> "BackendEndpoint":
        """Validates connection properties before any connection is attempted.

        Args:
            properties: Mapping with the keys ``url``, ``username`` and ``password``.
                Empty strings are accepted; absent keys and ``None`` are not.
            datasource_id: Used to label the error.

        Raises:
            ConfigurationError: If a required key is missing.
        """
        if properties is None:
            raise ConfigurationError("Connection properties are required", datasource_id)

        missing: List[str] = [
            message for key, message in _REQUIRED_PROPERTIES.items()
            if properties.get(key) is None
        ]
        if missing:
            raise ConfigurationError("; ".join(missing), datasource_id)

        password = properties["password"]
        if isinstance(password, SecretStr):
            password = password.get_secret_value()

        return cls(
            url=str(properties["url"]),
            username=str(properties["username"]),
            password=SecretStr(str(password)),
        )


class Column(BaseModel):
    name: str
    type: Optional[str] = Field(default=None, description="Canonical type name.")

    model_config = ConfigDict(frozen=True)


class Table(BaseModel):
    name: str
    columns: Tuple[Column, ...] = ()

    model_config = ConfigDict(frozen=True)

    def column_names(self) -> List[str]:
        return [col.name for col in self.columns]


class Schema(BaseModel):
    name: str
    tables: Dict[str, Table] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    def table(self, name: str) -> Optional[Table]:
        return self.tables.get(name)


# Sole artifact returned by discovery; the discoverer keeps no reference to it.
SchemaCatalog = Dict[str, Schema]
