from __future__ import annotations

"""
Appender Resolution and Sink Factories.

Maps destination tokens from the configuration onto standard library
handlers: the two console streams and rotating file handlers. Every handler
created here is tagged so the rest of the package can tell which kind of
destination it writes to, and so a reconfiguration can close exactly the
handlers it owns.
"""

import logging
import os
import sys
import threading
from logging.handlers import RotatingFileHandler
from typing import Dict, List, Optional

from complog.domain.log_config import validate_destination
from complog.infra.logging.config import SinkConfig

logger = logging.getLogger(__name__)

# Internal attribute used to tag and identify our own handlers
_HANDLER_TAG_ATTR: str = "_complog_sink"

STDOUT = "stdout"
STDERR = "stderr"


# ==============================================================================
# RESOLVER
# ==============================================================================

class AppenderResolver:
    """
    Turns destination tokens into handlers for one configuration generation.

    Console keywords map to a single shared handler each; file paths map to
    one handler per absolute path, so several loggers naming the same file
    share its handle.
    """

    def __init__(self, sink_config: Optional[SinkConfig] = None) -> None:
        self._sink_config = sink_config or SinkConfig()
        self._formatter = logging.Formatter(self._sink_config.fmt, datefmt=self._sink_config.datefmt)
        self._sinks: Dict[str, logging.Handler] = {}
        self._lock = threading.Lock()

    @property
    def sink_config(self) -> SinkConfig:
        return self._sink_config

    def resolve(self, token: object) -> logging.Handler:
        """
        Resolve a destination token to a handler.

        Args:
            token: "stdout", "stderr" (any case) or a file path.

        Returns:
            logging.Handler: A handler owned by this resolver.

        Raises:
            UnknownAppenderSpec: If the token is not a non-empty string.
        """
        where = validate_destination(token)
        keyword = where.lower()

        if keyword in (STDOUT, STDERR):
            key = keyword
        else:
            key = os.path.abspath(where)

        with self._lock:
            handler = self._sinks.get(key)
            if handler is None:
                handler = self._create(key)
                self._sinks[key] = handler
            return handler

    def handlers(self) -> List[logging.Handler]:
        """Return every handler created so far."""
        with self._lock:
            return list(self._sinks.values())

    def close(self) -> None:
        """Close all handlers created by this resolver."""
        sinks = self.handlers()
        with self._lock:
            self._sinks.clear()

        for h in sinks:
            try:
                h.close()
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to close sink {describe_handler(h)}: {e}")

    def _create(self, key: str) -> logging.Handler:
        if key == STDOUT:
            handler: logging.Handler = logging.StreamHandler(sys.stdout)
        elif key == STDERR:
            handler = logging.StreamHandler(sys.stderr)
        else:
            handler = _create_rotating_file_handler(key, self._sink_config)

        handler.setFormatter(self._formatter)
        _tag_handler(handler, key)
        logger.debug(f"Created sink {key}")
        return handler


# ==============================================================================
# HANDLER TAGGING
# ==============================================================================

def _tag_handler(handler: logging.Handler, destination: str) -> None:
    """Mark a handler as created by the resolver for the given destination."""
    setattr(handler, _HANDLER_TAG_ATTR, destination)


def is_our_handler(handler: logging.Handler) -> bool:
    """Return True if the handler was created by an AppenderResolver."""
    return getattr(handler, _HANDLER_TAG_ATTR, None) is not None


def describe_handler(handler: logging.Handler) -> str:
    """
    Name the destination a handler writes to.

    Returns:
        str: "stdout", "stderr", an absolute file path, or the handler's
             class name for handlers attached by other code.
    """
    if is_our_handler(handler):
        return str(getattr(handler, _HANDLER_TAG_ATTR))
    return type(handler).__name__


# ==============================================================================
# FILE SINKS
# ==============================================================================

def _create_rotating_file_handler(path: str, sink_config: SinkConfig) -> RotatingFileHandler:
    """
    Initialize a RotatingFileHandler for a file destination.

    The file is opened lazily by default so a reconfiguration never keeps a
    handle to a file that was moved in between.

    Args:
        path: Absolute path of the log file.
        sink_config: Shared sink options.

    Returns:
        RotatingFileHandler: The configured handler.
    """
    _ensure_parent_dir(path)
    return RotatingFileHandler(
        path,
        maxBytes=int(sink_config.max_bytes),
        backupCount=int(sink_config.backup_count),
        encoding=sink_config.encoding,
        delay=sink_config.delay,
    )


def _ensure_parent_dir(path: str) -> None:
    """Create the parent directory hierarchy for a target file."""
    parent = os.path.dirname(os.path.abspath(path))
    if parent and not os.path.exists(parent):
        os.makedirs(parent, exist_ok=True)
