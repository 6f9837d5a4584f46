"""Fake driver handles for exercising connections without a database."""

from __future__ import annotations

from typing import Any

import pytest

from sqlconduit import Connection


class FakeStatement:
    def __init__(self, handle: FakeHandle, sql: str) -> None:
        self.handle = handle
        self.sql = sql
        self.closed = False

    def execute(self, parameters: Any) -> Any:
        self.handle.executed.append((self.sql, list(parameters)))
        if self.handle.execute_error is not None:
            raise self.handle.execute_error
        return self.handle.execute_outcome

    def fetch_all_rows(self) -> list[dict[str, Any]]:
        return [dict(row) for row in self.handle.rows]

    def affected_row_count(self) -> int:
        return self.handle.rowcount

    def statement_text(self) -> str:
        return self.sql

    def close(self) -> None:
        self.closed = True
        if self.handle.close_error is not None:
            raise self.handle.close_error


class FakeHandle:
    def __init__(
        self,
        name: str = "fake",
        rows: list[dict[str, Any]] | None = None,
        rowcount: int = 0,
        execute_outcome: Any = True,
    ) -> None:
        self.name = name
        self.rows = rows or []
        self.rowcount = rowcount
        self.execute_outcome = execute_outcome
        self.execute_error: Exception | None = None
        self.prepare_error: Exception | None = None
        self.close_error: Exception | None = None
        self.statements: list[FakeStatement] = []
        self.executed: list[tuple[str, list[Any]]] = []
        self.driver_name_calls = 0

    def prepare(self, sql: str) -> FakeStatement:
        if self.prepare_error is not None:
            raise self.prepare_error
        statement = FakeStatement(self, sql)
        self.statements.append(statement)
        return statement

    def driver_name(self) -> str:
        self.driver_name_calls += 1
        return self.name


@pytest.fixture
def fake_handle() -> FakeHandle:
    return FakeHandle()


@pytest.fixture
def connection(fake_handle: FakeHandle) -> Connection:
    return Connection(fake_handle)


@pytest.fixture
def make_handle() -> type[FakeHandle]:
    return FakeHandle
