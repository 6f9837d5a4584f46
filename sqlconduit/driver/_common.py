"""Attributes shared by connections: driver handle, configuration, query log and grammar."""

import logging
from typing import TYPE_CHECKING, Any, Optional

from mypy_extensions import trait

from sqlconduit.core.grammar import get_grammar_class
from sqlconduit.core.query_log import QueryLog
from sqlconduit.exceptions import ImproperConfigurationError
from sqlconduit.utils.logging import get_logger, log_with_context

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlconduit.core.grammar import Grammar
    from sqlconduit.driver._protocols import DriverHandle

__all__ = ("CommonConnectionAttributesMixin",)

logger = get_logger("driver")


@trait
class CommonConnectionAttributesMixin:
    """State a connection owns for its whole lifetime.

    A connection is meant for one execution context at a time. Nothing here is
    synchronised: the handle, the query log and the cached grammar are all
    mutated in place.
    """

    __slots__ = ("_grammar", "config", "handle", "query_log")
    handle: "DriverHandle"
    config: "Mapping[str, Any]"
    query_log: QueryLog
    _grammar: "Optional[Grammar]"

    def __init__(self, handle: "DriverHandle", config: "Optional[Mapping[str, Any]]" = None) -> None:
        """Initialize the connection state.

        Args:
            handle: Native driver handle; owned by this connection.
            config: Connection configuration. The optional ``grammar`` key
                overrides the dialect reported by the driver.
        """
        self.handle = handle
        self.config = config if config is not None else {}
        self.query_log = QueryLog()
        self._grammar = None

    def driver(self) -> str:
        """Get the driver name reported by the native handle."""
        return self.handle.driver_name()

    def grammar(self) -> "Grammar":
        """Get the query grammar for this connection.

        The grammar is resolved on first use and cached for the lifetime of
        the connection; later changes to the configuration are not observed.

        Returns:
            The cached grammar instance.
        """
        if self._grammar is not None:
            return self._grammar

        key = self._grammar_key()
        grammar_class = get_grammar_class(key)
        self._grammar = grammar_class()
        log_with_context(logger, logging.DEBUG, "Resolved query grammar", dialect_key=key, grammar=grammar_class.__name__)
        return self._grammar

    def _grammar_key(self) -> str:
        configured = self.config.get("grammar")
        if configured is None or configured == "":
            return self.driver()
        if not isinstance(configured, str):
            msg = f"Connection option 'grammar' must be a string, got {type(configured).__name__}"
            raise ImproperConfigurationError(msg)
        return configured
