"""Driver handle for PEP 249 (DB-API 2.0) connections."""

from __future__ import annotations

import contextlib
import sys
from typing import TYPE_CHECKING, Any

from sqlconduit.core.parameters import ParameterStyle, convert_placeholders, resolve_parameter_style

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlconduit.typing import DictRow

__all__ = ("DBAPIHandle", "DBAPIStatement")


def _unique_column_names(description: Sequence[Sequence[Any]] | None) -> list[str]:
    """Column names from ``cursor.description``, with repeats suffixed ``_1``, ``_2``..."""
    names: list[str] = []
    seen: set[str] = set()
    for column in description or ():
        name = base = str(column[0])
        suffix = 0
        while name in seen:
            suffix += 1
            name = f"{base}_{suffix}"
        seen.add(name)
        names.append(name)
    return names


class DBAPIStatement:
    """A statement bound to a DB-API connection.

    DB-API has no separate prepare step, so the cursor is opened lazily on
    :meth:`execute` and kept until :meth:`close`.
    """

    __slots__ = ("_connection", "_cursor", "_native_sql", "_sql")

    def __init__(self, connection: Any, sql: str, paramstyle: ParameterStyle = ParameterStyle.QMARK) -> None:
        self._connection = connection
        self._sql = sql
        self._native_sql = convert_placeholders(sql, paramstyle)
        self._cursor: Any = None

    def execute(self, parameters: Sequence[Any]) -> bool:
        if self._cursor is None:
            self._cursor = self._connection.cursor()
        self._cursor.execute(self._native_sql, tuple(parameters))
        return True

    def fetch_all_rows(self) -> list[DictRow]:
        """Fetch every row as a dict in column order.

        A column name that repeats (``SELECT a.id, b.id ...``) is suffixed so
        no value is lost and positions are kept.
        """
        cursor = self._require_cursor()
        rows = cursor.fetchall()
        column_names = _unique_column_names(cursor.description)
        return [dict(zip(column_names, row)) for row in rows]

    def affected_row_count(self) -> int:
        rowcount = getattr(self._require_cursor(), "rowcount", None)
        return -1 if rowcount is None else int(rowcount)

    def statement_text(self) -> str:
        return self._sql

    @property
    def native_sql(self) -> str:
        """The statement as sent to the driver, in its parameter style."""
        return self._native_sql

    def close(self) -> None:
        if self._cursor is not None:
            with contextlib.suppress(Exception):
                self._cursor.close()
            self._cursor = None

    def _require_cursor(self) -> Any:
        if self._cursor is None:
            msg = "Statement has not been executed"
            raise RuntimeError(msg)
        return self._cursor


class DBAPIHandle:
    """Adapt a DB-API connection (``sqlite3``, ``psycopg``, ``pymysql``...) to the driver handle protocol.

    ``?`` placeholders are translated to the driver's ``paramstyle`` before
    execution, so the same statement runs on ``qmark``, ``numeric``,
    ``named``, ``format`` and ``pyformat`` drivers.

    Args:
        connection: An open DB-API connection.
        driver_name: Explicit driver name. Defaults to the top-level module of
            the connection's class, e.g. ``"sqlite3"``.
        paramstyle: Explicit parameter style. Defaults to the ``paramstyle``
            attribute of the driver module, or ``qmark`` when it has none.

    Raises:
        ImproperConfigurationError: If the parameter style is not a PEP 249 style.
    """

    __slots__ = ("_driver_name", "connection", "paramstyle")

    def __init__(
        self, connection: Any, driver_name: str | None = None, paramstyle: str | ParameterStyle | None = None
    ) -> None:
        self.connection = connection
        self._driver_name = driver_name
        if paramstyle is None:
            driver_module = sys.modules.get(self._connection_module())
            paramstyle = getattr(driver_module, "paramstyle", ParameterStyle.QMARK)
        self.paramstyle = resolve_parameter_style(paramstyle)

    def prepare(self, sql: str) -> DBAPIStatement:
        return DBAPIStatement(self.connection, sql, self.paramstyle)

    def driver_name(self) -> str:
        if self._driver_name:
            return self._driver_name
        return self._connection_module()

    def _connection_module(self) -> str:
        return type(self.connection).__module__.split(".", 1)[0]

    def __repr__(self) -> str:
        return f"DBAPIHandle(driver_name={self.driver_name()!r}, paramstyle={self.paramstyle.value!r})"
