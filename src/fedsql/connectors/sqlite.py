from sqlalchemy.engine import URL

from fedsql.sdk import CanonicalType

from .base import SQLAlchemyConnector


class SqliteConnector(SQLAlchemyConnector):
    """SQLite keeps no catalog views; the column list comes from pragma_table_info."""

    catalog_query = (
        "SELECT 'main' AS table_schema, m.name AS table_name, p.name AS column_name, p.type AS data_type "
        "FROM sqlite_master AS m JOIN pragma_table_info(m.name) AS p "
        "WHERE m.type IN ('table', 'view') AND substr(m.name, 1, 7) <> 'sqlite_' "
        "ORDER BY m.name, p.cid"
    )

    # Declared types are free text; patterns follow SQLite's affinity rules loosely.
    data_types = {
        "(?i)bigint": CanonicalType.BIGINT,
        "(?i)(tiny|small)int": CanonicalType.SMALLINT,
        "(?i).*int.*": CanonicalType.INTEGER,
        r"(?i)(n?varchar|varying character|text|clob)(\(.*\))?": CanonicalType.STRING,
        r"(?i)(n?char|character)(\(.*\))?": CanonicalType.CHAR,
        "(?i)blob": CanonicalType.BINARY,
        "(?i)real|double( precision)?|float": CanonicalType.DOUBLE,
        r"(?i)(numeric|decimal)(\(.*\))?": CanonicalType.DECIMAL,
        "(?i)bool(ean)?": CanonicalType.BOOLEAN,
        "(?i)date": CanonicalType.DATE,
        "(?i)datetime|timestamp": CanonicalType.TIMESTAMP,
        "(?i)time": CanonicalType.TIME,
    }

    def build_url(self) -> URL:
        # The pysqlite driver takes no credentials.
        return self._url
