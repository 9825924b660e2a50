from __future__ import annotations

"""
Call-Tracing Proxy.

TracingProxy wraps any object and logs every method call made through it:
method name, positional and keyword arguments, whether a trailing callback
was passed, and the return value. The first lookup of a method goes through
``__getattr__``, which builds a forwarding function and stores it in the
proxy's instance dictionary. Later lookups find it there directly, so only
the dispatch is cached; every call is still traced.
"""

import threading
from typing import Any, Callable, Dict, Optional, Tuple

from complog.core.node import LoggerNode
from complog.core.registry import LoggerRegistry, default_registry
from complog.domain.severity import Severity

# Attributes owned by the proxy itself; never forwarded to the target.
_OWN_PREFIX = "_proxy_"


class TracingProxy:
    """
    Transparent, logging forwarder around a target object.

    The target is referenced, never owned. Failures raised by the target,
    including the AttributeError for an unknown method, propagate unchanged.
    Non-callable attributes and dunder names are passed through untraced.
    """

    def __init__(
            self,
            target: Any,
            component: Any = None,
            registry: Optional[LoggerRegistry] = None,
    ) -> None:
        reg = registry or default_registry()
        self._proxy_target = target
        self._proxy_log: LoggerNode = reg.get(target if component is None else component)
        self._proxy_methods: Dict[str, Callable[..., Any]] = {}
        self._proxy_lock = threading.Lock()

    def __repr__(self) -> str:
        return f"<TracingProxy {self._proxy_log.name!r} for {self._proxy_target!r}>"

    def __getattr__(self, name: str) -> Any:
        if name.startswith(_OWN_PREFIX):
            raise AttributeError(name)

        attr = getattr(self._proxy_target, name)
        if _is_dunder(name) or not callable(attr):
            return attr

        with self._proxy_lock:
            forward = self._proxy_methods.get(name)
            if forward is None:
                forward = self._build_forwarder(name)
                self._proxy_methods[name] = forward
                # Instance attributes win over __getattr__ on the next lookup
                self.__dict__[name] = forward
        return forward

    def _build_forwarder(self, name: str) -> Callable[..., Any]:
        target = self._proxy_target
        log = self._proxy_log

        def forward(*args: Any, **kwargs: Any) -> Any:
            ret = getattr(target, name)(*args, **kwargs)
            if log.is_enabled_for(Severity.INFO):
                block = "y" if args and callable(args[-1]) and not isinstance(args[-1], type) else "n"
                log.info(
                    f"Method: {name} Args: {list(args)!r} KWargs: {kwargs!r} "
                    f"Block: {block} Return: {ret!r}"
                )
            return ret

        forward.__name__ = name
        forward.__qualname__ = f"{type(self).__name__}.{name}"
        return forward


def memoized_methods(proxy: TracingProxy) -> Tuple[str, ...]:
    """Names of the methods a proxy has cached forwarders for, in first-use order."""
    with proxy._proxy_lock:
        return tuple(proxy._proxy_methods)


def proxy_target(proxy: TracingProxy) -> Any:
    """Return the object a proxy forwards to."""
    return proxy._proxy_target


def proxy_logger(proxy: TracingProxy) -> LoggerNode:
    """Return the logger a proxy writes its trace records to."""
    return proxy._proxy_log


def _is_dunder(name: str) -> bool:
    return name.startswith("__") and name.endswith("__")


class LogMixin:
    """Gives instances a ``log`` attribute bound to their component's logger."""

    log: LoggerNode

    def log_init(self, component: Any = None, registry: Optional[LoggerRegistry] = None) -> None:
        reg = registry or default_registry()
        self.log = reg.get(self if component is None else component)
