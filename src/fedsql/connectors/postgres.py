from fedsql.sdk import CanonicalType

from .base import SQLAlchemyConnector


class PostgresConnector(SQLAlchemyConnector):
    catalog_query = (
        "SELECT table_schema, table_name, column_name, data_type "
        "FROM information_schema.columns "
        "WHERE table_schema NOT IN ('pg_catalog', 'information_schema') "
        "ORDER BY table_schema, table_name, ordinal_position"
    )

    data_types = {
        "character varying.*|text": CanonicalType.STRING,
        "character.*": CanonicalType.CHAR,
        "smallint": CanonicalType.SMALLINT,
        "integer": CanonicalType.INTEGER,
        "bigint": CanonicalType.BIGINT,
        "real": CanonicalType.FLOAT,
        "double precision": CanonicalType.DOUBLE,
        "numeric.*": CanonicalType.DECIMAL,
        "boolean": CanonicalType.BOOLEAN,
        "date": CanonicalType.DATE,
        "time( with(out)? time zone)?": CanonicalType.TIME,
        "timestamp( with(out)? time zone)?": CanonicalType.TIMESTAMP,
        "bytea": CanonicalType.BINARY,
    }
