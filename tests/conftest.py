import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))


class FakeCursor:
    """Iterates canned rows and records how often it was closed."""

    def __init__(self, rows, fail_after=None, close_error=None):
        self._rows = list(rows)
        self._fail_after = fail_after
        self._close_error = close_error
        self.close_calls = 0
        self.fetched = 0

    def __iter__(self):
        for row in self._rows:
            if self._fail_after is not None and self.fetched >= self._fail_after:
                raise RuntimeError("fetch failed")
            self.fetched += 1
            yield row

    def close(self):
        self.close_calls += 1
        if self._close_error is not None:
            raise self._close_error


class FakeConnection:
    """Connection stand-in: hands out one cursor and records executed statements."""

    def __init__(self, cursor=None, execute_error=None, close_error=None):
        self.cursor = cursor if cursor is not None else FakeCursor([])
        self._execute_error = execute_error
        self._close_error = close_error
        self.statements = []
        self.executed = []
        self.close_calls = 0

    def execute(self, statement):
        self.executed.append(statement)
        self.statements.append(str(statement))
        if self._execute_error is not None:
            raise self._execute_error
        return self.cursor

    def close(self):
        self.close_calls += 1
        if self._close_error is not None:
            raise self._close_error


@pytest.fixture
def make_connection():
    def _make(rows=(), **kwargs):
        cursor_kwargs = {k: kwargs.pop(k) for k in ("fail_after",) if k in kwargs}
        cursor_close_error = kwargs.pop("cursor_close_error", None)
        cursor = FakeCursor(rows, close_error=cursor_close_error, **cursor_kwargs)
        return FakeConnection(cursor=cursor, **kwargs)
    return _make


@pytest.fixture
def sqlite_db_path(tmp_path):
    import sqlite3

    db_path = tmp_path / "sales.db"
    conn = sqlite3.connect(db_path)
    try:
        conn.execute(
            "CREATE TABLE orders (id INTEGER PRIMARY KEY, customer VARCHAR(40), amount NUMERIC(10, 2), placed_at DATETIME)"
        )
        conn.execute("CREATE TABLE customers (id BIGINT, name TEXT, vip BOOLEAN, photo BLOB, region GEOMETRY)")
        conn.executemany(
            "INSERT INTO orders (customer, amount, placed_at) VALUES (?, ?, ?)",
            [("Ada", 10.5, "2024-01-01"), ("Linus", 20, "2024-01-02"), ("Grace", 30, None)],
        )
        conn.commit()
    finally:
        conn.close()
    return db_path
