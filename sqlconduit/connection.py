"""Connection: executes raw SQL against a native driver handle."""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

from sqlconduit.core.result import AffectedRowsResult, InsertResult, RowsResult, classify_statement
from sqlconduit.core.rewriter import expand_placeholders, flatten_bindings, strip_expressions
from sqlconduit.driver._common import CommonConnectionAttributesMixin
from sqlconduit.exceptions import QueryExecutionError
from sqlconduit.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from sqlconduit.core.grammar import Grammar
    from sqlconduit.core.result import QueryResult
    from sqlconduit.driver._protocols import DriverStatement
    from sqlconduit.typing import Bindings, DictRow

__all__ = ("Connection", "TableQuery")

logger = get_logger("connection")


class TableQuery(NamedTuple):
    """Everything a query builder needs to start a query against one table."""

    connection: "Connection"
    grammar: "Grammar"
    table: str

    @property
    def wrapped_table(self) -> str:
        """The table name quoted for the connection's dialect."""
        return self.grammar.wrap(self.table)


class Connection(CommonConnectionAttributesMixin):
    """A database connection executing raw SQL with positional bindings.

    Example::

        connection = Connection(DBAPIHandle(sqlite3.connect(":memory:")))
        users = connection.query("SELECT * FROM users WHERE id IN (...)", [[1, 2, 3]])
    """

    __slots__ = ()

    def scalar(self, sql: str, bindings: "Bindings" = ()) -> Optional[Any]:
        """Execute a query and return the value of the first column of the first row.

        The column is chosen by position, which suits aggregate queries::

            count = connection.scalar("SELECT COUNT(*) FROM users")

        Args:
            sql: The SQL text.
            bindings: Positional bindings.

        Returns:
            The first column value, or None when there is no row.
        """
        row = self.first(sql, bindings)
        if row is None:
            return None
        return next(iter(row.values()), None)

    def first(self, sql: str, bindings: "Bindings" = ()) -> "Optional[DictRow]":
        """Execute a query and return the first row.

        Args:
            sql: The SQL text.
            bindings: Positional bindings.

        Returns:
            The first row, or None when the query produced no rows. Statements
            other than ``SELECT`` produce no rows.
        """
        result = self.query(sql, bindings)
        if isinstance(result, RowsResult):
            return result.get_first()
        return None

    def query(self, sql: str, bindings: "Bindings" = ()) -> "QueryResult":
        """Execute a SQL statement.

        The result depends on the leading keyword of the statement:

        - ``SELECT`` returns a :class:`RowsResult` with every fetched row.
        - ``INSERT`` returns an :class:`InsertResult` with the success flag.
        - Anything else returns an :class:`AffectedRowsResult`.

        Raw expressions in ``bindings`` are dropped, since their text is already
        part of ``sql``. ``(...)`` markers are expanded from sequence bindings.
        The statement is recorded in :attr:`query_log` before it reaches the
        driver.

        Args:
            sql: The SQL text.
            bindings: Positional bindings.

        Raises:
            QueryExecutionError: When the driver fails to prepare, execute or
                fetch the statement.

        Returns:
            The shaped result.
        """
        filtered = strip_expressions(bindings)
        rewritten = expand_placeholders(sql.strip(), filtered)

        self.query_log.record(rewritten, filtered)
        parameters = flatten_bindings(filtered)
        log_with_context(logger, logging.DEBUG, "Executing query", sql=rewritten, parameter_count=len(parameters))

        with self.handle_database_exceptions(rewritten, filtered, raw_sql=sql):
            statement = self.handle.prepare(rewritten)
            try:
                return self._dispatch_execution(statement, parameters)
            finally:
                self._close_statement(statement)

    def _dispatch_execution(self, statement: "DriverStatement", parameters: "list[Any]") -> "QueryResult":
        outcome = statement.execute(parameters)
        operation_type = classify_statement(statement.statement_text())
        if operation_type == "SELECT":
            return RowsResult(list(statement.fetch_all_rows()))
        if operation_type == "INSERT":
            return InsertResult(bool(outcome))
        return AffectedRowsResult(statement.affected_row_count())

    @staticmethod
    def _close_statement(statement: "DriverStatement") -> None:
        # The outcome is already decided; a failing close must not replace it.
        try:
            statement.close()
        except Exception as e:
            log_with_context(logger, logging.DEBUG, "Statement close failed", error=str(e) or type(e).__name__)

    @contextmanager
    def handle_database_exceptions(
        self, sql: str, bindings: "Bindings", raw_sql: Optional[str] = None
    ) -> Generator[None, None, None]:
        """Wrap driver failures in :class:`QueryExecutionError`.

        Args:
            sql: The statement being executed.
            bindings: The bindings sent with it.
            raw_sql: The statement as the caller wrote it, before placeholder expansion.
        """
        try:
            yield
        except QueryExecutionError:
            raise
        except Exception as e:
            log_with_context(logger, logging.DEBUG, "Query execution failed", sql=sql, error=str(e))
            raise QueryExecutionError(
                sql, tuple(bindings), detail=str(e) or type(e).__name__, raw_sql=raw_sql
            ) from e

    def table(self, table: str) -> TableQuery:
        """Begin a fluent query against a table.

        Args:
            table: The table name.

        Returns:
            The handoff for the query builder, carrying this connection and its grammar.
        """
        return TableQuery(self, self.grammar(), table)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(handle={self.handle!r}, queries={len(self.query_log)})"
