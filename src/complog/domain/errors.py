from __future__ import annotations

"""
Configuration Error Hierarchy.

All errors raised while turning declarative logging data into a live logger
hierarchy. They are raised synchronously by the compiler and are meant to
abort startup instead of being defaulted away.
"""

from typing import Any


class ComplogConfigError(ValueError):
    """Base class for every logging configuration failure."""


class InvalidSeverity(ComplogConfigError):
    """Raised when a level token is not one of the recognized spellings."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Don't know how to treat {value!r} as a logger severity")


class UnknownAppenderSpec(ComplogConfigError):
    """Raised when a destination token is neither a stream keyword nor a path."""

    def __init__(self, value: Any) -> None:
        self.value = value
        super().__init__(f"Don't know how to convert {value!r} to an appender")


class MalformedLoggerSpec(ComplogConfigError):
    """Raised when a configuration entry has an unusable shape."""

    def __init__(self, component: Any, value: Any, reason: str = "") -> None:
        self.component = component
        self.value = value
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"Don't know how to use {value!r} to specify logger {component!r}{detail}"
        )


class ConfigSourceError(ComplogConfigError):
    """Raised when a configuration source path cannot be loaded."""

    def __init__(self, source: Any, reason: str) -> None:
        self.source = source
        super().__init__(f"Cannot load logging configuration from {source!r}: {reason}")
