from fedsql.sdk import CanonicalType

from .base import SQLAlchemyConnector


class MysqlConnector(SQLAlchemyConnector):
    # Table names map to files, so their case is significant on most servers.
    case_sensitive = True

    catalog_query = (
        "SELECT table_schema, table_name, column_name, column_type "
        "FROM information_schema.columns "
        "WHERE table_schema NOT IN ('mysql', 'information_schema', 'performance_schema', 'sys') "
        "ORDER BY table_schema, table_name, ordinal_position"
    )

    # column_type carries display widths and modifiers, e.g. "int(11) unsigned"
    data_types = {
        r"tinyint\(1\)": CanonicalType.BOOLEAN,
        "(tiny|small)int.*": CanonicalType.SMALLINT,
        "bigint.*": CanonicalType.BIGINT,
        "(medium)?int.*": CanonicalType.INTEGER,
        "float.*": CanonicalType.FLOAT,
        "(double|real).*": CanonicalType.DOUBLE,
        "(decimal|numeric).*": CanonicalType.DECIMAL,
        "varchar.*|(tiny|medium|long)?text": CanonicalType.STRING,
        "char.*": CanonicalType.CHAR,
        "date": CanonicalType.DATE,
        "(datetime|timestamp).*": CanonicalType.TIMESTAMP,
        "time.*": CanonicalType.TIME,
        "(tiny|medium|long)?blob|(var)?binary.*": CanonicalType.BINARY,
    }
