import re
from enum import Enum
from typing import List, Mapping, Optional, Pattern, Tuple


class CanonicalType(str, Enum):
    """Shared type vocabulary the bundled connectors map into."""

    STRING = "STRING"
    CHAR = "CHAR"
    BOOLEAN = "BOOLEAN"
    SMALLINT = "SMALLINT"
    INTEGER = "INTEGER"
    BIGINT = "BIGINT"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    DECIMAL = "DECIMAL"
    DATE = "DATE"
    TIME = "TIME"
    TIMESTAMP = "TIMESTAMP"
    BINARY = "BINARY"


class TypeMap:
    """Ordered mapping of backend type patterns to canonical type names.

    Patterns are regular expressions matched against the whole raw type name.
    The first matching pattern wins; a raw type nothing matches is returned
    unchanged.
    """

    def __init__(self, patterns: Mapping[str, str]):
        self._entries: List[Tuple[Pattern[str], str]] = [
            (re.compile(pattern), str(canonical.value if isinstance(canonical, Enum) else canonical))
            for pattern, canonical in patterns.items()
        ]

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TypeMap({[p.pattern for p, _ in self._entries]})"

    def resolve(self, raw_type: Optional[str]) -> Optional[str]:
        if raw_type is None:
            return None
        for pattern, canonical in self._entries:
            if pattern.fullmatch(raw_type):
                return canonical
        return raw_type
