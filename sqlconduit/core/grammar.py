"""Dialect grammars and the registry used to pick one per connection.

A grammar is a stateless dialect policy handed to the query builder. The core
only selects and caches it; the only SQL it renders here is identifier
quoting, delegated to sqlglot's dialect generators.
"""

import re
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Optional, TypeVar

from sqlglot import exp

from sqlconduit.core.rewriter import PLACEHOLDER
from sqlconduit.utils.type_guards import is_expression

if TYPE_CHECKING:
    from collections.abc import Iterable

__all__ = (
    "Grammar",
    "MySQLGrammar",
    "PostgresGrammar",
    "SQLServerGrammar",
    "SQLiteGrammar",
    "get_grammar_class",
    "list_registered_grammars",
    "register_grammar",
)

GrammarT = TypeVar("GrammarT", bound="type[Grammar]")

_ALIAS_SPLIT_RE = re.compile(r"\s+as\s+", re.IGNORECASE)

_GRAMMARS: "dict[str, type[Grammar]]" = {}


class Grammar:
    """Generic ANSI grammar, also the fallback for unknown dialects."""

    __slots__ = ()

    dialect: ClassVar[Optional[str]] = None
    """sqlglot dialect name used when rendering SQL fragments."""

    def wrap(self, value: Any) -> str:
        """Quote an identifier for this dialect.

        Dotted names are quoted segment by segment, ``*`` is left alone, and
        ``"name as alias"`` quotes both sides. Raw expressions pass through.

        Args:
            value: Column or table name.

        Returns:
            The quoted identifier.
        """
        if is_expression(value):
            return str(value)

        name, *alias = _ALIAS_SPLIT_RE.split(value, maxsplit=1)
        if alias:
            return f"{self.wrap(name)} AS {self._wrap_segment(alias[0].strip())}"

        return ".".join(self._wrap_segment(segment) for segment in name.strip().split("."))

    def _wrap_segment(self, segment: str) -> str:
        if segment == "*":
            return segment
        return exp.to_identifier(segment, quoted=True).sql(dialect=self.dialect)

    def parameter(self, value: Any) -> str:
        """Return the placeholder for a value, or the raw text of an expression."""
        if is_expression(value):
            return str(value)
        return PLACEHOLDER

    def parameterize(self, values: "Iterable[Any]") -> str:
        """Comma-join the placeholders for a list of values."""
        return ", ".join(self.parameter(value) for value in values)

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


def register_grammar(*keys: str) -> "Callable[[GrammarT], GrammarT]":
    """Register a grammar class under one or more dialect keys.

    Keys are matched case-insensitively. Registering an existing key replaces
    the previous grammar.

    Args:
        *keys: Driver names or configuration values that select the grammar.

    Returns:
        A class decorator.
    """

    def decorator(grammar_class: GrammarT) -> GrammarT:
        for key in keys:
            _GRAMMARS[key.lower()] = grammar_class
        return grammar_class

    return decorator


def get_grammar_class(key: Optional[str]) -> "type[Grammar]":
    """Look up the grammar for a dialect key.

    Args:
        key: Configured grammar name or driver name.

    Returns:
        The registered grammar class, or :class:`Grammar` when the key is unknown.
    """
    if not key:
        return Grammar
    return _GRAMMARS.get(key.lower(), Grammar)


def list_registered_grammars() -> "list[str]":
    """Return the registered dialect keys."""
    return sorted(_GRAMMARS)


@register_grammar("mysql", "pymysql", "mysqldb", "asyncmy")
class MySQLGrammar(Grammar):
    """MySQL grammar, quoting with backticks."""

    __slots__ = ()
    dialect = "mysql"


@register_grammar("pgsql", "postgres", "postgresql", "psycopg", "psycopg2", "asyncpg")
class PostgresGrammar(Grammar):
    __slots__ = ()
    dialect = "postgres"


@register_grammar("sqlite", "sqlite3")
class SQLiteGrammar(Grammar):
    __slots__ = ()
    dialect = "sqlite"


@register_grammar("sqlsrv", "mssql", "pyodbc", "pymssql")
class SQLServerGrammar(Grammar):
    """SQL Server grammar, quoting with brackets."""

    __slots__ = ()
    dialect = "tsql"
