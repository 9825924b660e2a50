from __future__ import annotations

"""
Unit tests for process startup configuration.

Verifies:
1. Source selection from the environment (explicit file, debug flag, default).
2. Bootstrap compiles the selected source into the given registry.
"""

import json
from pathlib import Path

import pytest

from complog.bootstrap import ENV_DEBUG, ENV_LOG_CONFIG, bootstrap, select_log_config
from complog.core.registry import LoggerRegistry
from complog.domain.errors import ConfigSourceError
from complog.domain.severity import Severity


def test_default_source_without_environment() -> None:
    assert select_log_config({}) == {"default": "info"}


def test_debug_flag_selects_debug_default() -> None:
    assert select_log_config({ENV_DEBUG: "1"}) == {"default": "debug"}


def test_empty_debug_flag_is_ignored() -> None:
    assert select_log_config({ENV_DEBUG: ""}) == {"default": "info"}


def test_explicit_config_path_wins_over_debug() -> None:
    env = {ENV_LOG_CONFIG: "/etc/app/log.json", ENV_DEBUG: "1"}

    assert select_log_config(env) == "/etc/app/log.json"


def test_reads_process_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(ENV_LOG_CONFIG, raising=False)
    monkeypatch.setenv(ENV_DEBUG, "yes")

    assert select_log_config() == {"default": "debug"}


def test_bootstrap_compiles_config_file(registry: LoggerRegistry, tmp_path: Path) -> None:
    path = tmp_path / "log.json"
    path.write_text(json.dumps({"default": "error", "net": ["debug", "stderr"]}), encoding="utf-8")

    result = bootstrap(registry, {ENV_LOG_CONFIG: str(path)})

    assert result is registry
    assert registry.root.level is Severity.ERROR
    assert registry.get("net").additive is False


def test_bootstrap_with_defaults(registry: LoggerRegistry) -> None:
    bootstrap(registry, {ENV_DEBUG: "1"})

    assert registry.root.level is Severity.DEBUG
    assert registry.current_config == {"default": "debug"}


def test_bootstrap_missing_file_aborts(registry: LoggerRegistry, tmp_path: Path) -> None:
    with pytest.raises(ConfigSourceError):
        bootstrap(registry, {ENV_LOG_CONFIG: str(tmp_path / "nope.json")})
