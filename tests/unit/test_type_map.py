import pytest

from fedsql.sdk import CanonicalType, TypeMap


def test_first_full_match_wins_and_unmatched_types_pass_through():
    # Validates type normalisation because catalog columns must carry canonical types.
    # Arrange
    type_map = TypeMap({"VARCHAR.*": "STRING", "INT.*": "INTEGER"})

    # Act
    resolved = [type_map.resolve(t) for t in ("VARCHAR(20)", "INT4", "BLOB")]

    # Assert
    assert resolved == ["STRING", "INTEGER", "BLOB"]


def test_pattern_must_match_whole_type_name():
    type_map = TypeMap({"INT": "INTEGER"})

    assert type_map.resolve("INT") == "INTEGER"
    assert type_map.resolve("INT4") == "INT4"
    assert type_map.resolve("BIGINT") == "BIGINT"


def test_declaration_order_decides_overlapping_patterns():
    # Validates ordering because overlapping patterns are common in backend type maps.
    broad_first = TypeMap({".*INT.*": "INTEGER", "BIGINT": "BIGINT"})
    narrow_first = TypeMap({"BIGINT": "BIGINT", ".*INT.*": "INTEGER"})

    assert broad_first.resolve("BIGINT") == "INTEGER"
    assert narrow_first.resolve("BIGINT") == "BIGINT"


def test_empty_map_and_missing_type():
    type_map = TypeMap({})

    assert len(type_map) == 0
    assert type_map.resolve("ANYTHING") == "ANYTHING"
    assert type_map.resolve(None) is None


def test_canonical_enum_values_are_stored_as_names():
    type_map = TypeMap({"text": CanonicalType.STRING})

    assert type_map.resolve("text") == "STRING"
    assert type(type_map.resolve("text")) is str


def test_invalid_pattern_fails_at_construction():
    import re

    with pytest.raises(re.error):
        TypeMap({"(unclosed": "STRING"})
