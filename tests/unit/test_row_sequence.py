import pytest
from sqlalchemy.sql.elements import TextClause

from fedsql.common.errors import ExecutionError, RowSequenceConsumedError
from fedsql.execution import ExecutionState, SingleConnectionDataSource, enumerate_rows


def test_rows_come_back_in_cursor_order(make_connection):
    # Validates streaming because rows must reach the caller unchanged and in order.
    # Arrange
    conn = make_connection([(1, "a"), (2, "b"), (3, "c")])
    rows = enumerate_rows(SingleConnectionDataSource(conn), "SELECT 1", owned_connection=conn)

    # Act
    result = list(rows)

    # Assert
    assert result == [(1, "a"), (2, "b"), (3, "c")]
    assert rows.rows_read == 3
    assert rows.state is ExecutionState.CLOSED


def test_nothing_runs_until_first_row_is_requested(make_connection):
    conn = make_connection([(1,)])
    rows = enumerate_rows(SingleConnectionDataSource(conn), "SELECT 1", owned_connection=conn)

    assert conn.statements == []
    assert rows.state is ExecutionState.IDLE

    assert next(iter(rows)) == (1,)
    assert conn.statements == ["SELECT 1"]
    assert isinstance(conn.executed[0], TextClause)
    assert rows.state is ExecutionState.STREAMING


def test_exhausted_sequence_stays_exhausted(make_connection):
    conn = make_connection([(1,)])
    rows = iter(enumerate_rows(SingleConnectionDataSource(conn), "SELECT 1", owned_connection=conn))

    assert next(rows) == (1,)
    with pytest.raises(StopIteration):
        next(rows)
    with pytest.raises(StopIteration):
        next(rows)

    assert conn.cursor.close_calls == 1
    assert conn.close_calls == 1


def test_second_iteration_is_rejected(make_connection):
    # Validates single-pass semantics because re-reading would silently re-run or return nothing.
    conn = make_connection([(1,)])
    rows = enumerate_rows(SingleConnectionDataSource(conn), "SELECT 1", owned_connection=conn)
    list(rows)

    with pytest.raises(RowSequenceConsumedError):
        iter(rows)


def test_close_before_first_row_releases_owned_connection(make_connection):
    conn = make_connection([(1,)])
    rows = enumerate_rows(SingleConnectionDataSource(conn), "SELECT 1", owned_connection=conn)

    rows.close()
    rows.close()

    assert conn.statements == []
    assert conn.close_calls == 1
    assert list(rows) == []


def test_early_close_via_context_manager(make_connection):
    conn = make_connection([(1,), (2,), (3,)])

    with enumerate_rows(SingleConnectionDataSource(conn), "SELECT 1", owned_connection=conn) as rows:
        first = next(iter(rows))

    assert first == (1,)
    assert conn.cursor.close_calls == 1
    assert conn.close_calls == 1


def test_execute_failure_is_wrapped_and_releases_connection(make_connection):
    conn = make_connection(execute_error=RuntimeError("no such table"))
    rows = enumerate_rows(SingleConnectionDataSource(conn), "SELECT * FROM nope", owned_connection=conn)

    with pytest.raises(ExecutionError) as exc_info:
        list(rows)

    assert "no such table" in str(exc_info.value)
    assert conn.close_calls == 1
    assert rows.state is ExecutionState.CLOSED


def test_fetch_failure_mid_stream_releases_once(make_connection):
    # Validates release on failure because a broken stream must not leak the connection.
    conn = make_connection([(1,), (2,), (3,)], fail_after=1)
    rows = iter(enumerate_rows(SingleConnectionDataSource(conn), "SELECT 1", owned_connection=conn))

    assert next(rows) == (1,)
    with pytest.raises(ExecutionError):
        next(rows)

    assert conn.cursor.close_calls == 1
    assert conn.close_calls == 1


def test_close_failure_is_logged_not_raised(make_connection, caplog):
    conn = make_connection([(1,)], close_error=OSError("socket gone"))
    rows = enumerate_rows(SingleConnectionDataSource(conn), "SELECT 1", owned_connection=conn)

    assert list(rows) == [(1,)]
    assert "socket gone" in caplog.text
