from __future__ import annotations

"""
Severity Levels.

Defines the ordered severity scale used by every logger node and the parser
that maps configuration tokens onto it. Values line up with the standard
library levels so records can be handed to regular logging handlers.
"""

import enum
import logging
from typing import Any, Dict

from complog.domain.errors import InvalidSeverity


class Severity(enum.IntEnum):
    """Ordered logging importance: DEBUG < INFO < WARNING < ERROR < FATAL."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    FATAL = logging.CRITICAL

    @property
    def label(self) -> str:
        """Canonical lower-case name, as written in configuration files."""
        return self.name.lower()


# Accepted spellings. Matching is case-sensitive on purpose.
_SEVERITY_NAMES: Dict[str, Severity] = {
    "debug": Severity.DEBUG,
    "info": Severity.INFO,
    "warn": Severity.WARNING,
    "warning": Severity.WARNING,
    "err": Severity.ERROR,
    "error": Severity.ERROR,
    "fatal": Severity.FATAL,
}


def parse_severity(text: Any) -> Severity:
    """
    Convert a configuration token into a Severity.

    Args:
        text: Raw level token, e.g. "warn" or "error".

    Returns:
        Severity: The canonical severity for the token.

    Raises:
        InvalidSeverity: If the token is not a recognized spelling.
    """
    if not isinstance(text, str):
        raise InvalidSeverity(text)
    try:
        return _SEVERITY_NAMES[text]
    except KeyError:
        raise InvalidSeverity(text) from None
