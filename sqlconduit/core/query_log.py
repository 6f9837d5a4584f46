"""Append-only record of executed statements."""

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any, NamedTuple

from sqlconduit._serialization import encode_json

if TYPE_CHECKING:
    from sqlconduit.typing import Bindings

__all__ = ("QueryLog", "QueryLogEntry")


class QueryLogEntry(NamedTuple):
    """A statement as it was handed to the driver."""

    sql: str
    """SQL text after placeholder expansion."""
    bindings: "tuple[Any, ...]"
    """Bindings with raw expressions removed."""


class QueryLog:
    """Ordered log of every statement a connection attempted.

    Entries record intent, not outcome: a statement is recorded before the
    driver sees it, so failed attempts stay inspectable. The log never evicts
    entries; long-running processes should call :meth:`clear` themselves.
    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[QueryLogEntry] = []

    def record(self, sql: str, bindings: "Bindings") -> QueryLogEntry:
        entry = QueryLogEntry(sql, tuple(bindings))
        self._entries.append(entry)
        return entry

    def entries(self) -> "tuple[QueryLogEntry, ...]":
        return tuple(self._entries)

    def clear(self) -> None:
        self._entries.clear()

    def to_json(self) -> str:
        """Dump the log as a JSON array of ``{"sql": ..., "bindings": [...]}`` objects.

        Values without a native JSON form are written with ``str()``.
        """
        return encode_json([
            {"sql": entry.sql, "bindings": list(entry.bindings)} for entry in self._entries
        ])

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[QueryLogEntry]:
        return iter(tuple(self._entries))

    def __repr__(self) -> str:
        return f"QueryLog(entries={len(self._entries)})"

