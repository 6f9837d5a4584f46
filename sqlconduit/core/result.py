"""Query results for the three statement shapes.

``Connection.query`` returns exactly one of:

- :class:`RowsResult` for statements starting with ``SELECT``
- :class:`InsertResult` for statements starting with ``INSERT``
- :class:`AffectedRowsResult` for everything else (``UPDATE``, ``DELETE``, DDL...)
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Literal, Optional, Union

if TYPE_CHECKING:
    from sqlconduit.typing import DictRow

__all__ = (
    "AffectedRowsResult",
    "InsertResult",
    "OperationType",
    "QueryResult",
    "RowsResult",
    "classify_statement",
)

OperationType = Literal["SELECT", "INSERT", "EXECUTE"]


def classify_statement(sql: str) -> OperationType:
    """Classify a statement by its leading keyword.

    Leading whitespace is ignored and the comparison is case-insensitive.
    Anything that does not start with ``SELECT`` or ``INSERT`` is treated as a
    row-count statement, DDL included.

    Args:
        sql: The statement text.

    Returns:
        The operation type.
    """
    head = sql.lstrip()[:6].upper()
    if head == "SELECT":
        return "SELECT"
    if head == "INSERT":
        return "INSERT"
    return "EXECUTE"


@dataclass(frozen=True)
class RowsResult:
    """Rows fetched by a ``SELECT`` statement."""

    rows: "list[DictRow]" = field(default_factory=list)
    """Rows as column-name mappings in column order. Possibly empty."""
    operation_type: ClassVar[OperationType] = "SELECT"

    @property
    def value(self) -> "list[DictRow]":
        return self.rows

    def is_success(self) -> bool:
        return True

    def get_first(self) -> "Optional[DictRow]":
        """Get the first row or None when the result is empty."""
        return self.rows[0] if self.rows else None

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Any:
        return iter(self.rows)


@dataclass(frozen=True)
class InsertResult:
    """Outcome of an ``INSERT`` statement.

    Carries the driver's execution success flag, not a generated id or a row count.
    """

    success: bool
    operation_type: ClassVar[OperationType] = "INSERT"

    @property
    def value(self) -> bool:
        return self.success

    def is_success(self) -> bool:
        return self.success

    def __bool__(self) -> bool:
        return self.success


@dataclass(frozen=True)
class AffectedRowsResult:
    """Row count reported by the driver for any other statement."""

    rows_affected: int
    operation_type: ClassVar[OperationType] = "EXECUTE"

    @property
    def value(self) -> int:
        return self.rows_affected

    def is_success(self) -> bool:
        # DDL commonly reports -1
        return True


QueryResult = Union[RowsResult, InsertResult, AffectedRowsResult]
