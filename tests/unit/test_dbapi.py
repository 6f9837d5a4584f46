"""Unit tests for the DB-API driver handle."""

import sqlite3
import sys
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest

from sqlconduit import Connection, ImproperConfigurationError, QueryExecutionError
from sqlconduit.core.parameters import ParameterStyle
from sqlconduit.driver import DBAPIHandle, DBAPIStatement, DriverHandle, DriverStatement


def _mock_connection(rows: "list[tuple]", description: "list[tuple]", rowcount: int = -1) -> MagicMock:
    connection = MagicMock()
    cursor = connection.cursor.return_value
    cursor.fetchall.return_value = rows
    cursor.description = description
    cursor.rowcount = rowcount
    return connection


def test_handle_satisfies_protocols() -> None:
    handle = DBAPIHandle(MagicMock())
    assert isinstance(handle, DriverHandle)
    assert isinstance(handle.prepare("SELECT 1"), DriverStatement)


def test_driver_name_from_connection_module() -> None:
    connection = sqlite3.connect(":memory:")
    try:
        assert DBAPIHandle(connection).driver_name() == "sqlite3"
    finally:
        connection.close()


def test_explicit_driver_name() -> None:
    assert DBAPIHandle(MagicMock(), driver_name="pgsql").driver_name() == "pgsql"


def test_prepare_does_not_open_cursor() -> None:
    connection = MagicMock()
    statement = DBAPIHandle(connection).prepare("SELECT 1")

    assert statement.statement_text() == "SELECT 1"
    connection.cursor.assert_not_called()


def test_execute_and_fetch_rows() -> None:
    connection = _mock_connection([(1, "a"), (2, "b")], [("id", None), ("name", None)])
    statement = DBAPIStatement(connection, "SELECT id, name FROM t WHERE id IN (?, ?)")

    assert statement.execute([1, 2]) is True
    connection.cursor.return_value.execute.assert_called_once_with("SELECT id, name FROM t WHERE id IN (?, ?)", (1, 2))
    assert statement.fetch_all_rows() == [{"id": 1, "name": "a"}, {"id": 2, "name": "b"}]


def test_affected_row_count() -> None:
    statement = DBAPIStatement(_mock_connection([], [], rowcount=4), "UPDATE t SET x = 1")
    statement.execute([])
    assert statement.affected_row_count() == 4


def test_missing_rowcount_reports_minus_one() -> None:
    connection = _mock_connection([], [])
    connection.cursor.return_value.rowcount = None
    statement = DBAPIStatement(connection, "CREATE TABLE t (id INTEGER)")
    statement.execute([])
    assert statement.affected_row_count() == -1


def test_close_closes_cursor_and_suppresses_errors() -> None:
    connection = _mock_connection([], [])
    cursor = connection.cursor.return_value
    cursor.close.side_effect = RuntimeError("already closed")
    statement = DBAPIStatement(connection, "SELECT 1")
    statement.execute([])

    statement.close()
    statement.close()

    cursor.close.assert_called_once()


def test_fetch_before_execute_fails() -> None:
    with pytest.raises(RuntimeError):
        DBAPIStatement(MagicMock(), "SELECT 1").fetch_all_rows()


class FormatCursor:
    """Cursor that interpolates parameters with ``%``, like pymysql."""

    def __init__(self, log: "list[str]") -> None:
        self.log = log
        self.rowcount = -1

    def execute(self, sql: str, parameters: "tuple[Any, ...]") -> None:
        self.log.append(sql % tuple(repr(value) for value in parameters))
        self.rowcount = len(parameters)

    def close(self) -> None:
        pass


class FormatConnection:
    __module__ = "formatdriver.connections"

    def __init__(self) -> None:
        self.log: "list[str]" = []

    def cursor(self) -> FormatCursor:
        return FormatCursor(self.log)


@pytest.fixture
def format_driver(monkeypatch: pytest.MonkeyPatch) -> FormatConnection:
    monkeypatch.setitem(sys.modules, "formatdriver", SimpleNamespace(paramstyle="format"))
    return FormatConnection()


def test_paramstyle_read_from_driver_module(format_driver: FormatConnection) -> None:
    handle = DBAPIHandle(format_driver)

    assert handle.paramstyle is ParameterStyle.FORMAT
    assert handle.driver_name() == "formatdriver"


def test_paramstyle_defaults_to_qmark() -> None:
    connection = sqlite3.connect(":memory:")
    try:
        assert DBAPIHandle(connection).paramstyle is ParameterStyle.QMARK
    finally:
        connection.close()
    assert DBAPIHandle(MagicMock()).paramstyle is ParameterStyle.QMARK


def test_expanded_markers_run_on_format_driver(format_driver: FormatConnection) -> None:
    connection = Connection(DBAPIHandle(format_driver, driver_name="pymysql"))

    result = connection.query("DELETE FROM t WHERE id IN (...) AND name LIKE 'a%'", [[1, 2]])

    assert result.value == 2
    assert format_driver.log == ["DELETE FROM t WHERE id IN (1, 2) AND name LIKE 'a%'"]
    assert connection.query_log.entries()[0].sql == "DELETE FROM t WHERE id IN (?, ?) AND name LIKE 'a%'"


def test_statement_keeps_caller_text_and_sends_native_text() -> None:
    connection = MagicMock()
    statement = DBAPIStatement(connection, "SELECT * FROM t WHERE a = ? AND b = ?", ParameterStyle.NUMERIC)
    statement.execute([1, 2])

    assert statement.statement_text() == "SELECT * FROM t WHERE a = ? AND b = ?"
    assert statement.native_sql == "SELECT * FROM t WHERE a = :1 AND b = :2"
    connection.cursor.return_value.execute.assert_called_once_with("SELECT * FROM t WHERE a = :1 AND b = :2", (1, 2))


def test_explicit_paramstyle_overrides_driver_module() -> None:
    handle = DBAPIHandle(MagicMock(), paramstyle="pyformat")
    assert handle.prepare("SELECT ?").native_sql == "SELECT %s"


def test_unknown_paramstyle_is_rejected() -> None:
    with pytest.raises(ImproperConfigurationError):
        DBAPIHandle(MagicMock(), paramstyle="dollar")


def test_format_driver_errors_are_wrapped(format_driver: FormatConnection) -> None:
    connection = Connection(DBAPIHandle(format_driver))
    with pytest.raises(QueryExecutionError) as exc_info:
        connection.query("DELETE FROM t WHERE id = ?", [1, 2])
    assert isinstance(exc_info.value.__cause__, TypeError)


def test_duplicate_column_names_keep_every_value() -> None:
    connection = _mock_connection([(1, 2, 3)], [("id", None), ("id", None), ("id_1", None)])
    statement = DBAPIStatement(connection, "SELECT a.id, b.id, c.id_1 FROM a, b, c")
    statement.execute([])

    row = statement.fetch_all_rows()[0]
    assert list(row.items()) == [("id", 1), ("id_1", 2), ("id_1_1", 3)]
