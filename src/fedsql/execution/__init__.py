"""Execution bridge: backend connections adapted to the generic row engine."""
from fedsql.execution.data_source import SingleConnectionDataSource
from fedsql.execution.enumerable import ExecutionState, Row, RowSequence, enumerate_rows
from fedsql.execution.bridge import execute, execute_query

__all__ = [
    "SingleConnectionDataSource",
    "ExecutionState",
    "Row",
    "RowSequence",
    "enumerate_rows",
    "execute",
    "execute_query",
]
