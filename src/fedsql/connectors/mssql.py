from fedsql.sdk import CanonicalType

from .base import SQLAlchemyConnector


class MssqlConnector(SQLAlchemyConnector):
    catalog_query = (
        "SELECT TABLE_SCHEMA, TABLE_NAME, COLUMN_NAME, DATA_TYPE "
        "FROM INFORMATION_SCHEMA.COLUMNS "
        "WHERE TABLE_SCHEMA NOT IN ('sys', 'INFORMATION_SCHEMA') "
        "ORDER BY TABLE_SCHEMA, TABLE_NAME, ORDINAL_POSITION"
    )

    data_types = {
        "n?varchar|n?text": CanonicalType.STRING,
        "n?char": CanonicalType.CHAR,
        "bit": CanonicalType.BOOLEAN,
        "tinyint|smallint": CanonicalType.SMALLINT,
        "int": CanonicalType.INTEGER,
        "bigint": CanonicalType.BIGINT,
        "real": CanonicalType.FLOAT,
        "float": CanonicalType.DOUBLE,
        "decimal|numeric|(small)?money": CanonicalType.DECIMAL,
        "date": CanonicalType.DATE,
        "time": CanonicalType.TIME,
        "(small)?datetime2?|datetimeoffset": CanonicalType.TIMESTAMP,
        "(var)?binary|image": CanonicalType.BINARY,
    }
