from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, SecretStr


class DatasourceConfig(BaseModel):
    """Configuration for a single federated datasource."""
    id: str
    type: str = Field(..., description="Connector type, e.g. 'postgres' or 'sqlite'.")
    description: Optional[str] = None
    url: Optional[str] = Field(None, description="SQLAlchemy URL of the backend.")
    username: Optional[str] = None
    password: Optional[SecretStr] = None
    case_sensitive: Optional[bool] = Field(
        None, description="Overrides the connector's identifier case policy."
    )

    def connection_properties(self) -> Dict[str, Any]:
        """The property mapping a connector validates on construction."""
        return {
            "url": self.url,
            "username": self.username,
            "password": self.password,
        }


class DatasourceFileConfig(BaseModel):
    """File-level schema for datasources.yaml."""
    version: int = Field(1, description="Schema version")
    datasources: List[DatasourceConfig] = Field(default_factory=list)
