from __future__ import annotations

"""
Process Startup Configuration.

Chooses the logging configuration source for the process and compiles it
once. An explicit config file named by the environment wins; otherwise one
of the two built-in defaults is used depending on the debug flag.
"""

import logging
import os
from typing import Mapping, Optional

from complog.core.registry import LoggerRegistry, default_registry
from complog.domain.log_config import ConfigSource, get_default_log_config

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Environment Contract
# -----------------------------------------------------------------------------
ENV_LOG_CONFIG = "COMPLOG_LOG_CONFIG"
ENV_DEBUG = "COMPLOG_DEBUG"


def select_log_config(environ: Optional[Mapping[str, str]] = None) -> ConfigSource:
    """
    Pick the configuration source for this process.

    Args:
        environ: Environment to consult. Defaults to os.environ.

    Returns:
        ConfigSource: A path to a JSON config, or a built-in default mapping.
    """
    env = os.environ if environ is None else environ

    path = env.get(ENV_LOG_CONFIG)
    if path:
        return path

    return get_default_log_config(debug=bool(env.get(ENV_DEBUG)))


def bootstrap(
        registry: Optional[LoggerRegistry] = None,
        environ: Optional[Mapping[str, str]] = None,
) -> LoggerRegistry:
    """
    Compile the selected configuration into a registry.

    Args:
        registry: Target registry. Defaults to the process-wide one.
        environ: Environment to consult. Defaults to os.environ.

    Returns:
        LoggerRegistry: The configured registry.
    """
    reg = registry or default_registry()
    source = select_log_config(environ)
    logger.debug(f"Bootstrapping logging from {source!r}")
    return reg.compile(source)
