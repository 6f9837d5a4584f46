"""Shorthand placeholder expansion.

Raw queries may use ``(...)`` wherever a variable-length list of values is
needed, most commonly in ``WHERE ... IN`` conditions::

    connection.query("SELECT * FROM users WHERE id IN (...)", [[1, 2, 3]])

Each sequence binding replaces the next marker with one ``?`` per element, so
the statement above is sent to the driver as
``SELECT * FROM users WHERE id IN (?, ?, ?)`` with the parameters ``[1, 2, 3]``.
"""

from typing import TYPE_CHECKING, Any, Final

from sqlconduit.utils.type_guards import is_expression, is_sequence_binding

if TYPE_CHECKING:
    from sqlconduit.typing import Binding, Bindings

__all__ = (
    "MULTI_VALUE_MARKER",
    "PLACEHOLDER",
    "expand_placeholders",
    "flatten_bindings",
    "strip_expressions",
)

MULTI_VALUE_MARKER: Final[str] = "(...)"
PLACEHOLDER: Final[str] = "?"


def expand_placeholders(sql: str, bindings: "Bindings") -> str:
    """Replace ``(...)`` markers with the right number of placeholders.

    Sequence bindings are matched to markers by order: the first sequence
    fills the first marker, the second sequence the second marker and so on.
    Scalar bindings do not consume a marker. Markers without a matching
    sequence are left in place for the driver to reject.

    Args:
        sql: The SQL text.
        bindings: The positional bindings, raw expressions already removed.

    Returns:
        The SQL text with markers expanded. The input object is returned
        untouched when it contains no marker.
    """
    if MULTI_VALUE_MARKER not in sql:
        return sql

    for binding in bindings:
        if not is_sequence_binding(binding):
            continue
        group = "(" + ", ".join(PLACEHOLDER for _ in binding) + ")"
        sql = sql.replace(MULTI_VALUE_MARKER, group, 1)

    return sql


def flatten_bindings(bindings: "Bindings") -> "list[Any]":
    """Spread sequence bindings into individual positional parameters.

    Order matches :func:`expand_placeholders`, so the parameter count lines up
    with the expanded placeholders.
    """
    parameters: list[Any] = []
    for binding in bindings:
        if is_sequence_binding(binding):
            parameters.extend(binding)
        else:
            parameters.append(binding)
    return parameters


def strip_expressions(bindings: "Bindings") -> "list[Binding]":
    """Drop raw expression markers from the bindings."""
    return [binding for binding in bindings if not is_expression(binding)]
