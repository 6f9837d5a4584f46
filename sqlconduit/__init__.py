"""sqlconduit: raw SQL execution over any database driver."""

from sqlconduit import core, driver, exceptions, typing, utils
from sqlconduit.__metadata__ import __version__
from sqlconduit.connection import Connection, TableQuery
from sqlconduit.core import (
    AffectedRowsResult,
    Expression,
    Grammar,
    InsertResult,
    QueryLog,
    QueryLogEntry,
    QueryResult,
    RowsResult,
    get_grammar_class,
    raw,
    register_grammar,
)
from sqlconduit.driver import DBAPIHandle, DriverHandle, DriverStatement
from sqlconduit.exceptions import ImproperConfigurationError, QueryError, QueryExecutionError, SQLConduitError
from sqlconduit.typing import Binding, Bindings, ConnectionConfig, DictRow

__all__ = (
    "AffectedRowsResult",
    "Binding",
    "Bindings",
    "Connection",
    "ConnectionConfig",
    "DBAPIHandle",
    "DictRow",
    "DriverHandle",
    "DriverStatement",
    "Expression",
    "Grammar",
    "ImproperConfigurationError",
    "InsertResult",
    "QueryError",
    "QueryExecutionError",
    "QueryLog",
    "QueryLogEntry",
    "QueryResult",
    "RowsResult",
    "SQLConduitError",
    "TableQuery",
    "__version__",
    "core",
    "driver",
    "exceptions",
    "get_grammar_class",
    "raw",
    "register_grammar",
    "typing",
    "utils",
)
