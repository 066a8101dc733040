import logging
import json
import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

_datasource_ctx: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    "datasource_id", default=None
)


class DatasourceContextFilter(logging.Filter):
    """Injects the active datasource_id from the contextvar into the log record."""
    def filter(self, record):
        record.datasource_id = _datasource_ctx.get()
        return True


@contextmanager
def datasource_context(datasource_id: Optional[str]) -> Iterator[None]:
    """Context manager to tag log records emitted inside it with a datasource id."""
    token = _datasource_ctx.set(datasource_id)
    try:
        yield
    finally:
        _datasource_ctx.reset(token)


def current_datasource() -> Optional[str]:
    return _datasource_ctx.get()


class JsonFormatter(logging.Formatter):
    """Formatter that outputs JSON strings after parsing the LogRecord."""

    # Standard LogRecord attributes to ignore
    _STANDARD_ATTRS = {
        "args", "asctime", "created", "exc_info", "exc_text", "filename",
        "funcName", "levelname", "levelno", "lineno", "module",
        "msecs", "message", "msg", "name", "pathname", "process",
        "processName", "relativeCreated", "stack_info", "thread", "threadName",
        "taskName", "datasource_id"
    }

    def format(self, record: logging.LogRecord) -> str:
        """Formats the log record as a JSON string.

        Args:
           record (logging.LogRecord): The log record to format.

        Returns:
            str: The JSON-formatted log string.
        """
        log_record = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
        }

        if getattr(record, "datasource_id", None):
            log_record["datasource_id"] = record.datasource_id

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in self._STANDARD_ATTRS and not key.startswith("_"):
                log_record[key] = value

        return json.dumps(log_record, default=str)


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """Configures the root logger.

    Args:
        level (str): The logging level (default: INFO).
        json_format (bool): Whether to use JSON formatting (default: False).
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.addFilter(DatasourceContextFilter())

    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s - [%(datasource_id)s] - %(name)s - %(levelname)s - %(message)s"
        ))

    root_logger.addHandler(handler)

    # Silence driver chatter
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Gets a named logger.

    Args:
        name (str): The name of the logger.

    Returns:
        logging.Logger: The logger instance.
    """
    return logging.getLogger(name)
