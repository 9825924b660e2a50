from __future__ import annotations

"""
Component logging configured from declarative data, plus call tracing.

Typical use::

    import complog

    complog.bootstrap()  # call once at startup; until then nothing is written
    complog.configure_logger({"default": "info", "net": ["debug", "stderr"]})
    log = complog.get_logger("net")
    log.debug("connected")

    traced = complog.TracingProxy(client, component="net.client")
    traced.fetch("/status")  # logged at INFO through "net.client"
"""

from complog.bootstrap import bootstrap, select_log_config
from complog.core.node import LoggerNode
from complog.core.registry import (
    LoggerRegistry,
    configure_logger,
    current_log_config,
    default_registry,
    get_logger,
)
from complog.core.tracing import LogMixin, TracingProxy, memoized_methods
from complog.domain.errors import (
    ComplogConfigError,
    ConfigSourceError,
    InvalidSeverity,
    MalformedLoggerSpec,
    UnknownAppenderSpec,
)
from complog.domain.log_config import DEFAULT_COMPONENT, get_default_log_config
from complog.domain.severity import Severity, parse_severity
from complog.infra.logging.config import SinkConfig

__version__ = "0.1.0"

__all__ = [
    "ComplogConfigError",
    "ConfigSourceError",
    "DEFAULT_COMPONENT",
    "InvalidSeverity",
    "LogMixin",
    "LoggerNode",
    "LoggerRegistry",
    "MalformedLoggerSpec",
    "Severity",
    "SinkConfig",
    "TracingProxy",
    "UnknownAppenderSpec",
    "bootstrap",
    "configure_logger",
    "current_log_config",
    "default_registry",
    "get_default_log_config",
    "get_logger",
    "memoized_methods",
    "parse_severity",
    "select_log_config",
]
