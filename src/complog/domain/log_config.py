from __future__ import annotations

"""
Declarative Logging Configuration Model.

Handles the raw configuration grammar: a mapping from component names to
either a bare severity string or a list of the form
``[severity, destination, destination, ...]``. Provides loading from JSON
files, defensive freezing, and parsing into immutable LoggerSpec records.
Everything here is pure validation; no logger state is touched.
"""

import json
import logging
import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from complog.domain.errors import ConfigSourceError, MalformedLoggerSpec, UnknownAppenderSpec
from complog.domain.severity import Severity, parse_severity

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants & Defaults
# -----------------------------------------------------------------------------
DEFAULT_COMPONENT = "default"
DEFAULT_ROOT_LEVEL = "info"

ConfigSource = Union[str, "os.PathLike[str]", Mapping[str, Any]]


def get_default_log_config(debug: bool = False) -> Dict[str, Any]:
    """
    Build one of the two built-in configurations.

    Args:
        debug: If True, return the verbose variant.

    Returns:
        Dict[str, Any]: A fresh configuration mapping.
    """
    return {DEFAULT_COMPONENT: "debug" if debug else DEFAULT_ROOT_LEVEL}


# -----------------------------------------------------------------------------
# Data Models
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class LoggerSpec:
    """
    Parsed configuration of a single component.

    Attributes:
        component: Logger name the entry applies to ("default" is the root).
        level: Severity threshold for the logger.
        appenders: Destination tokens, or None for a level-only entry that
                   keeps inheriting its parent's output.
    """
    component: str
    level: Severity
    appenders: Optional[Tuple[str, ...]] = None

    @property
    def is_root(self) -> bool:
        return self.component == DEFAULT_COMPONENT

    @property
    def has_own_appenders(self) -> bool:
        return self.appenders is not None


@dataclass(frozen=True)
class ParsedLogConfig:
    """
    Fully validated configuration, ready to be applied.

    Attributes:
        raw: Frozen copy of the source mapping.
        root: Spec for the root logger (falls back to level "info").
        components: Specs of every other entry, in stored order.
    """
    raw: Mapping[str, Any]
    root: LoggerSpec
    components: Tuple[LoggerSpec, ...]


# -----------------------------------------------------------------------------
# Loading
# -----------------------------------------------------------------------------
def load_log_config(source: Optional[ConfigSource]) -> Optional[Mapping[str, Any]]:
    """
    Resolve a configuration source into a mapping.

    Paths (str or PathLike) are read as JSON. Mappings pass through.

    Args:
        source: A mapping, a path to a JSON file, or None.

    Returns:
        Optional[Mapping[str, Any]]: The raw mapping, or None for "no config".

    Raises:
        ConfigSourceError: If a path does not exist or holds invalid JSON.
    """
    if source is None or isinstance(source, Mapping):
        return source

    if not isinstance(source, (str, os.PathLike)):
        return source  # Shape error reported by freeze_log_config

    path = os.fspath(source)
    if not os.path.isfile(path):
        raise ConfigSourceError(path, "no such file")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigSourceError(path, f"invalid JSON ({e})") from e
    except OSError as e:
        raise ConfigSourceError(path, str(e)) from e

    logger.debug(f"Loaded logging configuration from {path}")
    return data


# -----------------------------------------------------------------------------
# Freezing & Parsing
# -----------------------------------------------------------------------------
def freeze_log_config(config: Any) -> Mapping[str, Any]:
    """
    Return a read-only copy of a raw configuration mapping.

    List values become tuples; the mapping itself becomes a mapping proxy.

    Raises:
        MalformedLoggerSpec: If the config is not a mapping with string keys.
    """
    if not isinstance(config, Mapping):
        raise MalformedLoggerSpec("<config>", config, "expected a mapping")

    frozen: Dict[str, Any] = {}
    for component, value in config.items():
        if not isinstance(component, str):
            raise MalformedLoggerSpec(component, value, "component names must be strings")
        frozen[component] = tuple(value) if isinstance(value, (list, tuple)) else value
    return MappingProxyType(frozen)


def validate_destination(token: Any) -> str:
    """
    Check that a destination token can name a sink.

    Raises:
        UnknownAppenderSpec: If the token is not a non-empty string.
    """
    if not isinstance(token, str) or not token:
        raise UnknownAppenderSpec(token)
    return token


def parse_logger_spec(component: str, value: Any) -> LoggerSpec:
    """
    Parse a single configuration entry.

    Args:
        component: The entry key.
        value: Either "level" or ["level", destination, ...].

    Returns:
        LoggerSpec: The validated entry.

    Raises:
        MalformedLoggerSpec: For any other shape.
        InvalidSeverity: For an unknown level token.
        UnknownAppenderSpec: For a non-string destination.
    """
    if isinstance(value, str):
        return LoggerSpec(component, parse_severity(value))

    if isinstance(value, (list, tuple)) and value and isinstance(value[0], str):
        level, *locations = value
        appenders = tuple(validate_destination(where) for where in locations)
        return LoggerSpec(component, parse_severity(level), appenders)

    raise MalformedLoggerSpec(component, value)


def parse_log_config(config: Any) -> ParsedLogConfig:
    """
    Freeze and parse a whole configuration mapping.

    Validation is complete before anything is returned, so callers can apply
    the result knowing it will not fail halfway on a bad entry.

    Args:
        config: Raw configuration mapping.

    Returns:
        ParsedLogConfig: Root spec, component specs and the frozen source.
    """
    frozen = freeze_log_config(config)

    root_value = frozen.get(DEFAULT_COMPONENT, DEFAULT_ROOT_LEVEL)
    root = parse_logger_spec(DEFAULT_COMPONENT, root_value)

    components = tuple(
        parse_logger_spec(component, value)
        for component, value in frozen.items()
        if component != DEFAULT_COMPONENT
    )
    return ParsedLogConfig(raw=frozen, root=root, components=components)
