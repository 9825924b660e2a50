from __future__ import annotations

"""
Sink Configuration Models.

Defines the formatting and file options shared by every sink the appender
resolver creates.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class SinkConfig:
    """
    Immutable options applied to every resolved sink.

    Attributes:
        fmt: Record layout for both stream and file sinks.
        datefmt: Chronological format for timestamp generation.
        encoding: Text encoding used by file sinks.
        max_bytes: Size per file segment before rotation (0 disables rotation).
        backup_count: Number of historical file segments to preserve.
        delay: Open files on first record instead of at resolution time.
    """
    fmt: str = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"
    encoding: str = "utf-8"

    max_bytes: int = 0
    backup_count: int = 0
    delay: bool = True
