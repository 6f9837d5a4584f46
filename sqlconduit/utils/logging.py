"""Logging for sqlconduit.

Every library logger lives under the ``sqlconduit`` namespace. Connections
emit DEBUG records whose structured fields (``sql``, ``parameter_count``,
``dialect_key``, ``grammar``, ``error``) travel in ``record.extra_fields``;
:class:`QueryRecordFormatter` renders them as one JSON object per line.

Records emitted inside :func:`correlation_scope` carry its correlation ID, so
the statements run on behalf of one request can be grouped together::

    configure_logging(max_sql_length=200)
    with correlation_scope(request_id):
        connection.query("SELECT * FROM users WHERE id IN (...)", [ids])
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Optional, Union

from sqlconduit._serialization import encode_json

__all__ = (
    "ROOT_LOGGER_NAME",
    "CorrelationIDFilter",
    "QueryRecordFormatter",
    "configure_logging",
    "correlation_id_var",
    "correlation_scope",
    "get_logger",
    "log_with_context",
)

ROOT_LOGGER_NAME = "sqlconduit"
_HANDLER_NAME = "sqlconduit.json"

correlation_id_var: "ContextVar[Optional[str]]" = ContextVar("sqlconduit_correlation_id", default=None)


@contextmanager
def correlation_scope(correlation_id: str) -> Iterator[str]:
    """Tag records emitted inside the block with ``correlation_id``.

    Scopes nest; the enclosing ID is restored on exit.
    """
    token = correlation_id_var.set(correlation_id)
    try:
        yield correlation_id
    finally:
        correlation_id_var.reset(token)


class CorrelationIDFilter(logging.Filter):
    """Stamp the current correlation ID on each record as ``correlation_id``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_var.get()
        return True


class QueryRecordFormatter(logging.Formatter):
    """Render records as JSON lines, flattening their structured fields.

    Args:
        max_sql_length: Shorten the ``sql`` field to this many characters,
            followed by ``...``. ``None`` keeps statements whole.
    """

    def __init__(self, max_sql_length: Optional[int] = None) -> None:
        super().__init__()
        self.max_sql_length = max_sql_length

    def format(self, record: logging.LogRecord) -> str:
        entry: "dict[str, Any]" = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(self._fields(record))

        correlation_id = getattr(record, "correlation_id", None)
        if correlation_id is not None:
            entry["correlation_id"] = correlation_id
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return encode_json(entry)

    def _fields(self, record: logging.LogRecord) -> "dict[str, Any]":
        fields = dict(getattr(record, "extra_fields", None) or {})
        sql = fields.get("sql")
        if self.max_sql_length is not None and isinstance(sql, str) and len(sql) > self.max_sql_length:
            fields["sql"] = f"{sql[: self.max_sql_length]}..."
        return fields


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get a logger under the ``sqlconduit`` namespace.

    Args:
        name: Logger name, relative to ``sqlconduit`` unless it already starts
            with it. If not provided, returns the root sqlconduit logger.

    Returns:
        The logger, with a :class:`CorrelationIDFilter` attached.
    """
    if name is None:
        return logging.getLogger(ROOT_LOGGER_NAME)

    if not name.startswith(ROOT_LOGGER_NAME):
        name = f"{ROOT_LOGGER_NAME}.{name}"

    logger = logging.getLogger(name)
    if not any(isinstance(f, CorrelationIDFilter) for f in logger.filters):
        logger.addFilter(CorrelationIDFilter())
    return logger


def configure_logging(
    level: Union[int, str] = logging.DEBUG,
    handler: Optional[logging.Handler] = None,
    max_sql_length: Optional[int] = None,
) -> logging.Handler:
    """Send sqlconduit records to a handler as JSON lines.

    A handler installed by an earlier call is removed and closed. Records stop
    propagating to the root logger.

    Args:
        level: Level for the ``sqlconduit`` logger.
        handler: Destination handler. Defaults to a stderr stream handler.
        max_sql_length: Passed to :class:`QueryRecordFormatter`.

    Returns:
        The installed handler.
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for existing in [h for h in root_logger.handlers if h.get_name() == _HANDLER_NAME]:
        root_logger.removeHandler(existing)
        existing.close()

    handler = handler if handler is not None else logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(QueryRecordFormatter(max_sql_length))
    root_logger.addHandler(handler)
    root_logger.setLevel(level)
    root_logger.propagate = False
    return handler


def log_with_context(logger: logging.Logger, level: int, message: str, **extra_fields: Any) -> None:
    """Log a message with structured extra fields.

    Skipped entirely when ``level`` is disabled for ``logger``.
    """
    if not logger.isEnabledFor(level):
        return
    logger.log(level, message, extra={"extra_fields": extra_fields}, stacklevel=2)
