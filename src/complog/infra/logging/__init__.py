from __future__ import annotations

from .appenders import (
    STDERR,
    STDOUT,
    AppenderResolver,
    describe_handler,
    is_our_handler,
)
from .config import SinkConfig

__all__ = [
    "AppenderResolver",
    "SinkConfig",
    "STDOUT",
    "STDERR",
    "describe_handler",
    "is_our_handler",
]
