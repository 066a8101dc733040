from fedsql.sdk import CanonicalType

from .postgres import PostgresConnector


class RedshiftConnector(PostgresConnector):
    """Redshift speaks the Postgres wire protocol but hides its internal schemas elsewhere."""

    catalog_query = (
        "SELECT table_schema, table_name, column_name, data_type "
        "FROM information_schema.columns "
        "WHERE table_schema NOT IN ('pg_catalog', 'information_schema', 'pg_internal', 'pg_automv') "
        "ORDER BY table_schema, table_name, ordinal_position"
    )

    data_types = {
        **PostgresConnector.data_types,
        "super": CanonicalType.STRING,
        "(var)?byte": CanonicalType.BINARY,
    }
