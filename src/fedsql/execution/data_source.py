from typing import Any, Optional, Type

from fedsql.sdk.protocols import Connection


class SingleConnectionDataSource:
    """Presents one already open connection through the DataSource shape.

    The row engine obtains its connection from a data source instead of being
    handed one. This adapter only implements that hand-over: every call returns
    the same connection. The rest of the data-source surface is never exercised
    on this path and is fixed:

    * credentials passed to :meth:`get_connection` are ignored;
    * ``login_timeout`` is always 100 seconds and assigning it is a no-op;
    * ``log_writer`` is always ``None`` and assigning it is a no-op;
    * :meth:`unwrap` raises ``TypeError``; :meth:`is_wrapper_for` is ``False``.
    """

    LOGIN_TIMEOUT_SECONDS = 100

    def __init__(self, connection: Connection):
        self._connection = connection

    def get_connection(self, username: Optional[str] = None, password: Optional[str] = None) -> Connection:
        return self._connection

    @property
    def login_timeout(self) -> int:
        return self.LOGIN_TIMEOUT_SECONDS

    @login_timeout.setter
    def login_timeout(self, seconds: int) -> None:
        pass

    @property
    def log_writer(self) -> Optional[Any]:
        return None

    @log_writer.setter
    def log_writer(self, writer: Any) -> None:
        pass

    def unwrap(self, cls: Type[Any]) -> Any:
        raise TypeError(f"{type(self).__name__} does not wrap {cls.__name__}")

    def is_wrapper_for(self, cls: Type[Any]) -> bool:
        return False
