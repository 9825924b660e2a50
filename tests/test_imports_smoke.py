# tests/test_imports_smoke.py
# -----------------------------------------------------------------------------
# Smoke tests for imports and the public package contract.
#
# Goals:
# - Ensure the package and its entry point are importable.
# - Validate the top-level API exposes what applications rely on.
# -----------------------------------------------------------------------------

from __future__ import annotations

import complog


def test_package_importable():
    assert complog.__version__


def test_public_api_contract():
    required = [
        "get_logger",
        "configure_logger",
        "current_log_config",
        "default_registry",
        "bootstrap",
        "select_log_config",
        "LoggerRegistry",
        "LoggerNode",
        "TracingProxy",
        "LogMixin",
        "Severity",
        "parse_severity",
        "InvalidSeverity",
        "UnknownAppenderSpec",
        "MalformedLoggerSpec",
    ]
    for name in required:
        assert hasattr(complog, name), f"complog missing: {name}"


def test_entry_point_importable():
    from complog.main import main

    assert callable(main)
