"""Placeholder translation for drivers that do not accept ``?``.

Statements leave the rewriter in ``qmark`` style. DB-API drivers advertise
their own style through the module-level ``paramstyle`` attribute; before a
statement is sent, every ``?`` outside string literals and comments is
replaced with that driver's positional token.
"""

import re
from enum import Enum
from typing import Final

from sqlconduit.exceptions import ImproperConfigurationError

__all__ = ("ParameterStyle", "convert_placeholders", "resolve_parameter_style")


class ParameterStyle(str, Enum):
    """PEP 249 ``paramstyle`` values."""

    QMARK = "qmark"
    NUMERIC = "numeric"
    NAMED = "named"
    FORMAT = "format"
    PYFORMAT = "pyformat"

    def __str__(self) -> str:
        return self.value


_PERCENT_STYLES: Final = frozenset({ParameterStyle.FORMAT, ParameterStyle.PYFORMAT})

_PLACEHOLDER_REGEX: Final = re.compile(
    r"""
    (?P<dquote>"(?:[^"\\]|\\.)*") |
    (?P<squote>'(?:[^'\\]|\\.)*') |
    (?P<backtick>`[^`]*`) |
    (?P<line_comment>--[^\r\n]*) |
    (?P<block_comment>/\*(?:[^*]|\*(?!/))*\*/) |
    (?P<pg_q_operator>\?\?|\?\||\?&) |
    (?P<qmark>\?) |
    (?P<percent>%)
    """,
    re.VERBOSE,
)


def resolve_parameter_style(paramstyle: "str | ParameterStyle") -> ParameterStyle:
    """Turn a ``paramstyle`` string into a :class:`ParameterStyle`.

    Raises:
        ImproperConfigurationError: If the value is not a PEP 249 style.
    """
    try:
        return ParameterStyle(str(paramstyle).lower())
    except ValueError:
        msg = f"Unsupported paramstyle {paramstyle!r}; expected one of {', '.join(s.value for s in ParameterStyle)}"
        raise ImproperConfigurationError(msg) from None


def convert_placeholders(sql: str, style: ParameterStyle) -> str:
    """Rewrite ``?`` placeholders into the positional token of ``style``.

    ``numeric`` and ``named`` drivers get ``:1``, ``:2``..., since drivers of
    both styles bind a sequence by position. ``format`` and ``pyformat``
    drivers get ``%s``, and every literal ``%`` is doubled because those
    drivers run the statement through ``%`` interpolation.

    Args:
        sql: A statement in ``qmark`` style.
        style: The driver's parameter style.

    Returns:
        The statement in the driver's style. ``qmark`` statements are returned unchanged.
    """
    if style is ParameterStyle.QMARK:
        return sql

    percent_style = style in _PERCENT_STYLES
    ordinal = 0

    def _replace(match: "re.Match[str]") -> str:
        nonlocal ordinal
        kind = match.lastgroup
        text = match.group()
        if kind == "qmark":
            ordinal += 1
            return "%s" if percent_style else f":{ordinal}"
        if percent_style:
            return text.replace("%", "%%")
        return text

    return _PLACEHOLDER_REGEX.sub(_replace, sql)
