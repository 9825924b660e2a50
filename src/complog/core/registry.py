from __future__ import annotations

"""
Logger Registry and Configuration Compiler.

Holds the process-wide table of logger nodes and turns declarative
configuration into a live hierarchy. Compilation validates the whole
configuration first, builds the new hierarchy on a fresh set of sinks, and
only then swaps it in under the registry lock. A failed compile therefore
leaves the previous configuration untouched, and a successful one never
leaves stale handlers (or file handles) from the previous generation behind.
"""

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Tuple

from complog.core.node import LoggerNode
from complog.domain.log_config import (
    ConfigSource,
    LoggerSpec,
    ParsedLogConfig,
    load_log_config,
    parse_log_config,
)
from complog.domain.severity import Severity
from complog.infra.logging.appenders import STDOUT, AppenderResolver, describe_handler
from complog.infra.logging.config import SinkConfig

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Constants
# -----------------------------------------------------------------------------
ROOT_NAME = "root"
BASELINE_LEVEL = Severity.DEBUG
_SEPARATOR = "."


def component_name(component: Any) -> str:
    """
    Derive the logger name for a component identifier.

    Strings are used as-is, classes are named ``module.QualName`` and any
    other object is named after its class.
    """
    if isinstance(component, str):
        return component or ROOT_NAME
    if isinstance(component, type):
        return f"{component.__module__}.{component.__qualname__}"
    return component_name(type(component))


# -----------------------------------------------------------------------------
# Registry
# -----------------------------------------------------------------------------
class LoggerRegistry:
    """
    Process-wide lookup table from component names to logger nodes.

    A single reentrant lock guards node creation, record dispatch and
    compilation, so compiling never interleaves with emission.
    """

    def __init__(self, sink_config: Optional[SinkConfig] = None) -> None:
        self._lock = threading.RLock()
        self._sink_config = sink_config or SinkConfig()
        self._generation = 0
        self._resolver = AppenderResolver(self._sink_config)
        self._root = self._baseline_root(self._generation)
        self._nodes: Dict[str, LoggerNode] = {}
        self._current_config: Optional[Mapping[str, Any]] = None

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------
    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def generation(self) -> int:
        """Counter bumped by every reset or successful compile."""
        return self._generation

    @property
    def root(self) -> LoggerNode:
        return self._root

    @property
    def sink_config(self) -> SinkConfig:
        return self._sink_config

    @property
    def current_config(self) -> Optional[Mapping[str, Any]]:
        """Frozen copy of the last compiled configuration, if any."""
        return self._current_config

    def names(self) -> Tuple[str, ...]:
        """Names of every node created in the current generation."""
        with self._lock:
            return (ROOT_NAME,) + tuple(sorted(self._nodes))

    def describe(self) -> Dict[str, Any]:
        """
        Build a JSON-serializable snapshot of the hierarchy.

        Returns:
            Dict[str, Any]: Generation, compiled config and one entry per node.
        """
        with self._lock:
            nodes = [self._root] + [self._nodes[n] for n in sorted(self._nodes)]
            config = None
            if self._current_config is not None:
                config = {
                    k: list(v) if isinstance(v, tuple) else v
                    for k, v in self._current_config.items()
                }
            return {
                "generation": self._generation,
                "config": config,
                "loggers": [_describe_node(n) for n in nodes],
            }

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------
    def get(self, component: Any) -> LoggerNode:
        """
        Return the logger for a component, creating it on first use.

        A new node is parented to its nearest existing dotted ancestor (or the
        root) and inherits level and output from there.
        """
        name = component_name(component)
        with self._lock:
            if name == ROOT_NAME:
                return self._root
            node = self._nodes.get(name)
            if node is None:
                node = self._create(self._nodes, self._root, name, self._generation)
            return node

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------
    def reset(self) -> None:
        """Discard every node and sink and return to the baseline state."""
        self.compile(None)

    def compile(self, config: Optional[ConfigSource]) -> LoggerRegistry:
        """
        Compile a declarative configuration into the live hierarchy.

        Args:
            config: A mapping, a path to a JSON file, or None to reset to the
                    baseline (root at DEBUG with no sinks, so nothing is written).

        Returns:
            LoggerRegistry: This registry, for chaining.

        Raises:
            ComplogConfigError: If the configuration is invalid. The previous
                                configuration stays live in that case.
        """
        raw = load_log_config(config)
        parsed = parse_log_config(raw) if raw is not None else None

        with self._lock:
            generation = self._generation + 1
            resolver = AppenderResolver(self._sink_config)
            try:
                if parsed is None:
                    root, nodes = self._baseline_root(generation), {}
                else:
                    root, nodes = self._build(parsed, resolver, generation)
            except BaseException:
                resolver.close()
                raise

            stale_resolver = self._resolver
            self._root = root
            self._nodes = nodes
            self._resolver = resolver
            self._generation = generation
            self._current_config = parsed.raw if parsed is not None else None

        stale_resolver.close()

        if parsed is None:
            logger.debug(f"Logging reset to baseline (generation {generation})")
        else:
            logger.debug(
                f"Logging configured: {len(parsed.components) + 1} loggers "
                f"(generation {generation})"
            )
        return self

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------
    def _baseline_root(self, generation: int) -> LoggerNode:
        return LoggerNode(ROOT_NAME, level=BASELINE_LEVEL, registry=self, generation=generation)

    def _build(
            self, parsed: ParsedLogConfig, resolver: AppenderResolver, generation: int
    ) -> Tuple[LoggerNode, Dict[str, LoggerNode]]:
        root = LoggerNode(ROOT_NAME, level=parsed.root.level, registry=self, generation=generation)
        root.set_appenders([resolver.resolve(STDOUT)])
        _apply_spec(root, parsed.root, resolver)

        nodes: Dict[str, LoggerNode] = {}
        for spec in parsed.components:
            name = component_name(spec.component)
            node = root if name == ROOT_NAME else nodes.get(name)
            if node is None:
                node = self._create(nodes, root, name, generation)
            _apply_spec(node, spec, resolver)
        return root, nodes

    def _create(
            self, nodes: Dict[str, LoggerNode], root: LoggerNode, name: str, generation: int
    ) -> LoggerNode:
        parent = root
        prefix = name
        while _SEPARATOR in prefix:
            prefix = prefix.rsplit(_SEPARATOR, 1)[0]
            if prefix in nodes:
                parent = nodes[prefix]
                break

        node = LoggerNode(name, parent=parent, registry=self, generation=generation)

        # Adopt existing descendants that were attached above the new node
        child_prefix = name + _SEPARATOR
        for other in nodes.values():
            if other.name.startswith(child_prefix) and not other.parent.name.startswith(child_prefix):
                other._parent = node

        nodes[name] = node
        return node


def _apply_spec(node: LoggerNode, spec: LoggerSpec, resolver: AppenderResolver) -> None:
    node.set_level(spec.level)
    if spec.appenders is None:
        return

    # The root has no parent to propagate to, so its additive flag is left alone
    if not node.is_root:
        node.additive = False
    node.set_appenders(resolver.resolve(where) for where in spec.appenders)


def _describe_node(node: LoggerNode) -> Dict[str, Any]:
    return {
        "name": node.name,
        "parent": node.parent.name if node.parent is not None else None,
        "level": node.level.label if node.level is not None else None,
        "effective_level": node.effective_level.label,
        "appenders": [describe_handler(h) for h in node.appenders],
        "additive": node.additive,
    }


# -----------------------------------------------------------------------------
# Process-wide Registry
# -----------------------------------------------------------------------------
_default_registry = LoggerRegistry()


def default_registry() -> LoggerRegistry:
    """Return the process-wide registry used by the module-level helpers."""
    return _default_registry


def get_logger(component: Any) -> LoggerNode:
    """Acquire the logger configured for a component."""
    return _default_registry.get(component)


def configure_logger(config: Optional[ConfigSource]) -> LoggerRegistry:
    """Compile a configuration into the process-wide registry."""
    return _default_registry.compile(config)


def current_log_config() -> Optional[Mapping[str, Any]]:
    """Return the last configuration compiled into the process-wide registry."""
    return _default_registry.current_config
