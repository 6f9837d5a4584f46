"""Core statement handling: placeholder expansion, results, query log and grammars."""

from sqlconduit.core.expression import Expression, raw
from sqlconduit.core.rewriter import (
    MULTI_VALUE_MARKER,
    PLACEHOLDER,
    expand_placeholders,
    flatten_bindings,
    strip_expressions,
)
from sqlconduit.core.parameters import ParameterStyle, convert_placeholders, resolve_parameter_style
from sqlconduit.core.result import (
    AffectedRowsResult,
    InsertResult,
    OperationType,
    QueryResult,
    RowsResult,
    classify_statement,
)
from sqlconduit.core.query_log import QueryLog, QueryLogEntry
from sqlconduit.core.grammar import (
    Grammar,
    MySQLGrammar,
    PostgresGrammar,
    SQLiteGrammar,
    SQLServerGrammar,
    get_grammar_class,
    list_registered_grammars,
    register_grammar,
)

__all__ = (
    "MULTI_VALUE_MARKER",
    "PLACEHOLDER",
    "AffectedRowsResult",
    "Expression",
    "Grammar",
    "InsertResult",
    "MySQLGrammar",
    "OperationType",
    "ParameterStyle",
    "PostgresGrammar",
    "QueryLog",
    "QueryLogEntry",
    "QueryResult",
    "RowsResult",
    "SQLServerGrammar",
    "SQLiteGrammar",
    "classify_statement",
    "convert_placeholders",
    "expand_placeholders",
    "flatten_bindings",
    "get_grammar_class",
    "list_registered_grammars",
    "raw",
    "register_grammar",
    "resolve_parameter_style",
    "strip_expressions",
)
