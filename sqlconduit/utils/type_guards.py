"""Type guard functions for runtime type checking of bindings."""

from typing import TYPE_CHECKING, Any

from sqlconduit.core.expression import Expression

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

    from sqlconduit.typing import SequenceBinding

__all__ = ("is_expression", "is_sequence_binding")


def is_expression(obj: Any) -> "TypeGuard[Expression]":
    """Check if a binding is a raw SQL expression marker.

    Args:
        obj: The binding to check

    Returns:
        True if the binding must be left out of the driver parameters
    """
    return isinstance(obj, Expression)


def is_sequence_binding(obj: Any) -> "TypeGuard[SequenceBinding]":
    """Check if a binding is a multi-value sequence.

    Only ``list`` and ``tuple`` qualify; strings and bytes are scalars.

    Args:
        obj: The binding to check

    Returns:
        True if the binding expands into several placeholders
    """
    return isinstance(obj, (list, tuple))

