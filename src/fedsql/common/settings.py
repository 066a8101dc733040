from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env into os.environ
load_dotenv()


class Settings(BaseSettings):
    """Application configuration settings backed by environment variables."""

    datasource_config_path: str = Field(
        default="configs/datasources.yaml",
        validation_alias="FEDSQL_DATASOURCE_CONFIG",
        description="Path to the YAML file listing the federated datasources."
    )
    log_level: str = Field(default="INFO", validation_alias="FEDSQL_LOG_LEVEL")
    log_json: bool = Field(
        default=False,
        validation_alias="FEDSQL_LOG_JSON",
        description="Emit JSON log lines instead of plain text."
    )
    strict_catalog_ordering: bool = Field(
        default=False,
        validation_alias="FEDSQL_STRICT_CATALOG_ORDERING",
        description="Reject catalog results that are not grouped by (schema, table)."
    )
    preview_row_limit: int = Field(
        default=100,
        validation_alias="FEDSQL_PREVIEW_ROW_LIMIT",
        description="Default number of rows printed by the `query` command."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )


settings = Settings()
