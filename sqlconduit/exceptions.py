from typing import Any, Optional

__all__ = (
    "ImproperConfigurationError",
    "QueryError",
    "QueryExecutionError",
    "SQLConduitError",
)


class SQLConduitError(Exception):
    """Base exception class from which all sqlconduit exceptions inherit."""

    detail: str

    def __init__(self, *args: Any, detail: str = "") -> None:
        """Initialize ``SQLConduitError``.

        Args:
            *args: args are converted to :class:`str` before passing to :class:`Exception`
            detail: detail of the exception.
        """
        str_args = [str(arg) for arg in args if arg]
        if not detail:
            if str_args:
                detail, *str_args = str_args
            elif hasattr(self, "detail"):
                detail = self.detail
        self.detail = detail
        super().__init__(*str_args)

    def __repr__(self) -> str:
        if self.detail:
            return f"{self.__class__.__name__} - {self.detail}"
        return self.__class__.__name__

    def __str__(self) -> str:
        return " ".join((*self.args, self.detail)).strip()


class ImproperConfigurationError(SQLConduitError):
    """Improper Configuration error.

    Raised when a connection configuration value has the wrong shape.
    """


class QueryError(SQLConduitError):
    """Base class for Query errors."""


class QueryExecutionError(QueryError):
    """Raised when the driver fails to prepare or execute a statement.

    The native driver exception is chained as ``__cause__``.
    """

    sql: str
    raw_sql: str
    bindings: "tuple[Any, ...]"

    def __init__(
        self,
        sql: str,
        bindings: "tuple[Any, ...]" = (),
        detail: Optional[str] = None,
        raw_sql: Optional[str] = None,
    ) -> None:
        """Initialize with the failed statement and its bindings.

        Args:
            sql: The SQL text that was sent to the driver, after placeholder expansion.
            bindings: The bindings that were sent with it.
            detail: The native driver error message.
            raw_sql: The SQL text as the caller wrote it. Defaults to ``sql``.
        """
        if detail:
            super().__init__("Query execution failed:", detail=detail)
        else:
            super().__init__("Query execution failed")
        self.sql = sql
        self.raw_sql = sql if raw_sql is None else raw_sql
        self.bindings = tuple(bindings)
