from typing import Any, Callable, Iterator, Optional, Protocol, Type, runtime_checkable

from sqlalchemy.sql.expression import Executable


@runtime_checkable
class ResultCursor(Protocol):
    """Forward-only cursor over the rows of one executed statement."""

    def __iter__(self) -> Iterator[Any]:
        ...

    def close(self) -> None:
        ...


@runtime_checkable
class Connection(Protocol):
    """Blocking backend connection. A SQLAlchemy ``Connection`` satisfies it.

    Discovery and the row engine always pass ``execute`` a SQLAlchemy
    executable (a ``text()`` clause), never a raw SQL string. Connectors for
    DBAPI-only drivers must accept that, e.g. by executing ``str(statement)``.
    """

    def execute(self, statement: Executable) -> ResultCursor:
        ...

    def close(self) -> None:
        ...


# The connection capability: each call opens a new, exclusively owned connection.
ConnectionFactory = Callable[[], Connection]


@runtime_checkable
class DataSource(Protocol):
    """Capability the generic row engine obtains its connection through."""

    login_timeout: int
    log_writer: Optional[Any]

    def get_connection(self, username: Optional[str] = None, password: Optional[str] = None) -> Connection:
        ...

    def unwrap(self, cls: Type[Any]) -> Any:
        ...

    def is_wrapper_for(self, cls: Type[Any]) -> bool:
        ...
