from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. A fresh, isolated LoggerRegistry per test.
3. A record-collecting handler for asserting on emitted records.
"""

import logging
import os
import sys
from typing import Generator, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from complog.core.registry import LoggerRegistry  # noqa: E402


# -----------------------------------------------------------------------------
# Helpers
# -----------------------------------------------------------------------------
class CollectingHandler(logging.Handler):
    """Handler that keeps every record it receives."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.records: List[logging.LogRecord] = []

    def emit(self, record: logging.LogRecord) -> None:
        self.records.append(record)

    @property
    def messages(self) -> List[str]:
        return [r.getMessage() for r in self.records]


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def registry() -> Generator[LoggerRegistry, None, None]:
    """
    Provide an isolated registry and release its sinks afterwards.

    Yields:
        LoggerRegistry: A registry in its baseline state.
    """
    reg = LoggerRegistry()
    yield reg
    reg.reset()


@pytest.fixture
def collector() -> CollectingHandler:
    return CollectingHandler()


@pytest.fixture
def make_collector() -> type:
    """Return the collecting handler class for tests needing several sinks."""
    return CollectingHandler
