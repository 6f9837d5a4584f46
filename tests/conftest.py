from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

here = Path(__file__).parent
root_path = here.parent


@pytest.fixture(autouse=True)
def _restore_library_logger() -> Generator[None, None, None]:
    """Undo ``configure_logging`` side effects between tests."""
    logger = logging.getLogger("sqlconduit")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        if handler not in handlers:
            handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate
