from typing import List

import pytest

from fedsql.catalog import CatalogFolder, FoldState, fold_catalog_rows
from fedsql.common.errors import CatalogNameCollisionError, CatalogOrderingError, ErrorCode
from fedsql.sdk import CatalogRow, TypeMap

TYPES = TypeMap({"VARCHAR.*": "STRING", "INT.*": "INTEGER"})


def _rows(layout) -> List[CatalogRow]:
    """Expands {schema: {table: n_columns}} into ordered catalog rows."""
    rows = []
    for schema, tables in layout.items():
        for table, n_columns in tables.items():
            for i in range(n_columns):
                rows.append((schema, table, f"c{i}", "INT"))
    return rows


def test_fold_counts_match_distinct_keys():
    # Validates the group-by because schema, table and column counts must survive the fold.
    # Arrange
    layout = {"s1": {"a": 3, "b": 1}, "s2": {"a": 2}, "s3": {"x": 1, "y": 4, "z": 2}}

    # Act
    catalog = fold_catalog_rows(_rows(layout), TYPES, case_sensitive=True)

    # Assert
    assert len(catalog) == 3
    assert sum(len(s.tables) for s in catalog.values()) == 6
    assert sum(len(t.columns) for s in catalog.values() for t in s.tables.values()) == 13
    assert [len(t.columns) for t in catalog["s3"].tables.values()] == [1, 4, 2]


def test_identifiers_are_upper_cased_when_not_case_sensitive():
    # Arrange
    rows = [("sales", "orders", "id", "INT4"), ("sales", "orders", "note", "VARCHAR(10)")]

    # Act
    catalog = fold_catalog_rows(rows, TYPES, case_sensitive=False)

    # Assert
    assert list(catalog) == ["SALES"]
    table = catalog["SALES"].table("ORDERS")
    assert table.column_names() == ["ID", "NOTE"]
    assert [c.type for c in table.columns] == ["INTEGER", "STRING"]


def test_identifiers_keep_casing_when_case_sensitive():
    rows = [("Sales", "Orders", "Id", "int")]

    catalog = fold_catalog_rows(rows, TYPES, case_sensitive=True)

    assert catalog["Sales"].tables["Orders"].columns[0].name == "Id"
    # types are never case-normalised; "int" does not match "INT.*"
    assert catalog["Sales"].tables["Orders"].columns[0].type == "int"


def test_columns_keep_row_order_within_table():
    rows = [("s", "t", name, "INT") for name in ("z", "a", "m")]

    catalog = fold_catalog_rows(rows, TYPES, case_sensitive=True)

    assert catalog["s"].tables["t"].column_names() == ["z", "a", "m"]


def test_empty_input_yields_empty_catalog():
    folder = CatalogFolder(TYPES, case_sensitive=False)

    assert folder.finish() == {}
    assert folder.state is FoldState.FINISHED


def test_same_table_name_in_two_schemas_stays_separate():
    # Validates the (schema, table) grouping key because table names repeat across schemas.
    rows = [("s1", "t", "a", "INT"), ("s2", "t", "b", "INT")]

    catalog = fold_catalog_rows(rows, TYPES, case_sensitive=True)

    assert catalog["s1"].tables["t"].column_names() == ["a"]
    assert catalog["s2"].tables["t"].column_names() == ["b"]


def test_null_type_is_kept_as_none():
    catalog = fold_catalog_rows([("s", "t", "c", None)], TYPES, case_sensitive=True)

    assert catalog["s"].tables["t"].columns[0].type is None


def test_lenient_mode_replaces_reappearing_table():
    rows = [("s", "t", "a", "INT"), ("s", "u", "b", "INT"), ("s", "t", "c", "INT")]

    catalog = fold_catalog_rows(rows, TYPES, case_sensitive=True)

    assert catalog["s"].tables["t"].column_names() == ["c"]


def test_strict_mode_rejects_reappearing_table():
    # Validates ordering checks because unordered catalog SQL silently loses columns.
    rows = [("s", "t", "a", "INT"), ("s", "u", "b", "INT"), ("s", "t", "c", "INT")]

    with pytest.raises(CatalogOrderingError):
        fold_catalog_rows(rows, TYPES, case_sensitive=True, strict_ordering=True)


def test_strict_mode_rejects_reappearing_schema():
    rows = [("s1", "t", "a", "INT"), ("s2", "t", "b", "INT"), ("s1", "u", "c", "INT")]

    with pytest.raises(CatalogOrderingError):
        fold_catalog_rows(rows, TYPES, case_sensitive=True, strict_ordering=True)


def test_add_after_finish_is_rejected():
    folder = CatalogFolder(TYPES, case_sensitive=True)
    folder.finish()

    with pytest.raises(RuntimeError):
        folder.add(("s", "t", "c", "INT"))


def test_schemas_differing_only_in_case_collide():
    # Validates collision detection because upper-casing must never merge two schemas silently.
    # Arrange
    rows = [("SALES", "a", "x", "INT"), ("sales", "b", "y", "INT")]

    # Act
    with pytest.raises(CatalogNameCollisionError) as exc_info:
        fold_catalog_rows(rows, TYPES, case_sensitive=False)

    # Assert
    assert exc_info.value.error_code is ErrorCode.CATALOG_NAME_COLLISION
    assert "'sales'" in str(exc_info.value)
    assert "'SALES'" in str(exc_info.value)


@pytest.mark.parametrize("strict", [False, True])
def test_tables_differing_only_in_case_collide(strict):
    rows = [("s", "Orders", "x", "INT"), ("s", "orders", "y", "INT")]

    with pytest.raises(CatalogNameCollisionError) as exc_info:
        fold_catalog_rows(rows, TYPES, case_sensitive=False, strict_ordering=strict)

    assert "'orders'" in str(exc_info.value)
    assert "'Orders'" in str(exc_info.value)


def test_columns_differing_only_in_case_collide():
    rows = [("s", "t", "Id", "INT"), ("s", "t", "ID", "INT")]

    with pytest.raises(CatalogNameCollisionError):
        fold_catalog_rows(rows, TYPES, case_sensitive=False)


def test_same_table_name_in_different_schemas_is_not_a_collision():
    rows = [("s1", "Orders", "x", "INT"), ("s2", "orders", "y", "INT")]

    catalog = fold_catalog_rows(rows, TYPES, case_sensitive=False)

    assert catalog["S1"].tables["ORDERS"].column_names() == ["X"]
    assert catalog["S2"].tables["ORDERS"].column_names() == ["Y"]


def test_case_sensitive_mode_keeps_names_differing_in_case():
    rows = [("s", "Orders", "x", "INT"), ("s", "orders", "y", "INT")]

    catalog = fold_catalog_rows(rows, TYPES, case_sensitive=True)

    assert sorted(catalog["s"].tables) == ["Orders", "orders"]
