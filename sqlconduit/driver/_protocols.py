"""Protocols for the native driver handle a connection executes against."""

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlconduit.typing import DictRow

__all__ = ("DriverHandle", "DriverStatement")


@runtime_checkable
class DriverStatement(Protocol):
    """A prepared statement produced by :meth:`DriverHandle.prepare`."""

    def execute(self, parameters: "Sequence[Any]") -> Any:
        """Execute with flat positional parameters and return the driver's outcome."""
        ...

    def fetch_all_rows(self) -> "list[DictRow]":
        """Fetch every remaining row as a column-name mapping."""
        ...

    def affected_row_count(self) -> int:
        """Number of rows affected by the last execution."""
        ...

    def statement_text(self) -> str:
        """The SQL text the statement was prepared from."""
        ...

    def close(self) -> None:
        """Release driver resources held by the statement."""
        ...


@runtime_checkable
class DriverHandle(Protocol):
    """A native database connection."""

    def prepare(self, sql: str) -> DriverStatement:
        """Prepare a statement for execution."""
        ...

    def driver_name(self) -> str:
        """Name of the underlying driver, used to pick a grammar."""
        ...
