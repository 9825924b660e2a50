from __future__ import annotations

"""
Hierarchical Logger Node.

A LoggerNode is one named logger of the hierarchy. It knows its parent,
optionally carries its own severity threshold (otherwise it inherits the
nearest ancestor's), owns an ordered list of handlers and an additive flag
controlling whether records continue up to the parent's handlers.
"""

import logging
import sys
import threading
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Tuple, Union

from complog.domain.severity import Severity, parse_severity

if TYPE_CHECKING:
    from complog.core.registry import LoggerRegistry

LevelLike = Union[Severity, str, int]


def _as_severity(level: LevelLike) -> Severity:
    if isinstance(level, Severity):
        return level
    if isinstance(level, str):
        return parse_severity(level)
    return Severity(level)


class LoggerNode:
    """
    Named logger supporting debug/info/warning/error/fatal emission.

    Nodes are created by a LoggerRegistry. When the registry is reset or
    recompiled, nodes created before that point become detached: they keep
    working, but forward every call to the live node of the same name.
    """

    def __init__(
            self,
            name: str,
            *,
            parent: Optional[LoggerNode] = None,
            level: Optional[LevelLike] = None,
            registry: Optional[LoggerRegistry] = None,
            generation: int = 0,
    ) -> None:
        self._name = name
        self._parent = parent
        self._level: Optional[Severity] = None if level is None else _as_severity(level)
        self._appenders: List[logging.Handler] = []
        self.additive = True

        self._registry = registry
        self._generation = generation
        self._lock = registry.lock if registry is not None else threading.RLock()

    def __repr__(self) -> str:
        level = self._level.label if self._level is not None else "-"
        return f"<LoggerNode {self._name!r} level={level} additive={self.additive}>"

    # -------------------------------------------------------------------------
    # Hierarchy & Settings
    # -------------------------------------------------------------------------
    @property
    def name(self) -> str:
        return self._name

    @property
    def parent(self) -> Optional[LoggerNode]:
        return self._parent

    @property
    def is_root(self) -> bool:
        return self._parent is None

    @property
    def level(self) -> Optional[Severity]:
        """The node's own threshold, or None when it inherits one."""
        return self._level

    @property
    def effective_level(self) -> Severity:
        """Own threshold or the nearest configured ancestor's."""
        node: Optional[LoggerNode] = self._live()
        while node is not None:
            if node._level is not None:
                return node._level
            node = node._parent
        return Severity.DEBUG

    @property
    def appenders(self) -> Tuple[logging.Handler, ...]:
        """Handlers attached directly to this node."""
        return tuple(self._appenders)

    @property
    def detached(self) -> bool:
        """True once the owning registry has been reset or recompiled."""
        return self._registry is not None and self._generation != self._registry.generation

    def set_level(self, level: Optional[LevelLike]) -> None:
        if level is None and self.is_root:
            raise ValueError("The root logger must keep an explicit level")
        severity = None if level is None else _as_severity(level)
        with self._lock:
            self._level = severity

    def set_appenders(self, appenders: Iterable[logging.Handler]) -> None:
        """Replace this node's own handlers."""
        with self._lock:
            self._appenders = list(appenders)

    def add_appender(self, appender: logging.Handler) -> None:
        with self._lock:
            if appender not in self._appenders:
                self._appenders.append(appender)

    def effective_appenders(self) -> Tuple[logging.Handler, ...]:
        """Every handler a record emitted here reaches, in dispatch order."""
        collected: List[logging.Handler] = []
        node: Optional[LoggerNode] = self._live()
        while node is not None:
            collected.extend(node._appenders)
            if not node.additive:
                break
            node = node._parent
        return tuple(collected)

    # -------------------------------------------------------------------------
    # Emission API
    # -------------------------------------------------------------------------
    def is_enabled_for(self, level: LevelLike) -> bool:
        return _as_severity(level) >= self.effective_level

    def log(self, level: LevelLike, msg: Any, *args: Any, exc_info: Any = None) -> None:
        self._log(_as_severity(level), msg, args, exc_info)

    def debug(self, msg: Any, *args: Any, exc_info: Any = None) -> None:
        self._log(Severity.DEBUG, msg, args, exc_info)

    def info(self, msg: Any, *args: Any, exc_info: Any = None) -> None:
        self._log(Severity.INFO, msg, args, exc_info)

    def warning(self, msg: Any, *args: Any, exc_info: Any = None) -> None:
        self._log(Severity.WARNING, msg, args, exc_info)

    warn = warning

    def error(self, msg: Any, *args: Any, exc_info: Any = None) -> None:
        self._log(Severity.ERROR, msg, args, exc_info)

    def exception(self, msg: Any, *args: Any) -> None:
        """Log at ERROR including the exception currently being handled."""
        self._log(Severity.ERROR, msg, args, True)

    def fatal(self, msg: Any, *args: Any, exc_info: Any = None) -> None:
        self._log(Severity.FATAL, msg, args, exc_info)

    critical = fatal

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    def _live(self) -> LoggerNode:
        if self.detached:
            assert self._registry is not None
            return self._registry.get(self._name)
        return self

    def _log(self, severity: Severity, msg: Any, args: Tuple[Any, ...], exc_info: Any) -> None:
        with self._lock:
            node = self._live()
            if severity < node.effective_level:
                return
            record = node._make_record(severity, msg, args, exc_info)
            node._dispatch(record)

    def _make_record(
            self, severity: Severity, msg: Any, args: Tuple[Any, ...], exc_info: Any
    ) -> logging.LogRecord:
        if exc_info:
            if isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            elif not isinstance(exc_info, tuple):
                exc_info = sys.exc_info()

        record = logging.LogRecord(
            self._name, int(severity), "(unknown file)", 0, msg, args or None, exc_info or None
        )
        record.levelname = severity.name
        return record

    def _dispatch(self, record: logging.LogRecord) -> None:
        node: Optional[LoggerNode] = self
        while node is not None:
            for handler in node._appenders:
                if record.levelno >= handler.level:
                    handler.handle(record)
            if not node.additive:
                break
            node = node._parent
