"""Raw SQL expression marker."""

from typing import Any

__all__ = ("Expression", "raw")


class Expression:
    """A fragment of SQL that is embedded verbatim instead of being bound.

    The caller is responsible for placing the text into the statement. When an
    ``Expression`` appears among the bindings it is dropped before execution so
    the positional parameter count stays aligned with the placeholders.
    """

    __slots__ = ("value",)

    def __init__(self, value: str) -> None:
        self.value = value

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Expression({self.value!r})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Expression):
            return NotImplemented
        return self.value == other.value

    def __hash__(self) -> int:
        return hash((Expression, self.value))


def raw(value: str) -> Expression:
    """Create a raw SQL expression.

    Args:
        value: SQL text to embed without escaping.

    Returns:
        The expression marker.
    """
    return Expression(value)
