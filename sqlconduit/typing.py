from collections.abc import Sequence
from typing import Any, Union

from typing_extensions import TypeAlias, TypedDict

from sqlconduit.core.expression import Expression

__all__ = (
    "Binding",
    "Bindings",
    "ConnectionConfig",
    "DictRow",
    "ScalarBinding",
    "SequenceBinding",
)

ScalarBinding: TypeAlias = Any
"""A literal value bound to a single ``?`` placeholder."""
SequenceBinding: TypeAlias = Union["list[Any]", "tuple[Any, ...]"]
"""Literal values that fill a ``(...)`` marker."""
Binding: TypeAlias = Union[ScalarBinding, Expression, SequenceBinding]
"""Any value accepted in the bindings of a query."""
Bindings: TypeAlias = Sequence[Binding]
"""Ordered positional bindings."""
DictRow: TypeAlias = "dict[str, Any]"
"""A result row keyed by column name in column order."""


class ConnectionConfig(TypedDict, total=False):
    """Recognised connection configuration keys.

    Unrecognised keys are kept on the connection and ignored.
    """

    grammar: str
    """Explicit dialect override used to pick the grammar."""
