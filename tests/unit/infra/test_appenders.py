from __future__ import annotations

"""
Unit tests for appender resolution.

Verifies:
1. Stream keywords match case-insensitively and are shared.
2. File paths produce (and reuse) rotating file handlers.
3. Invalid tokens are rejected.
4. Closing releases every handler the resolver created.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from complog.domain.errors import UnknownAppenderSpec
from complog.infra.logging import AppenderResolver, SinkConfig, describe_handler, is_our_handler


@pytest.fixture
def resolver():
    r = AppenderResolver()
    yield r
    r.close()


@pytest.mark.parametrize("token", ["stdout", "STDOUT", "StdOut"])
def test_stdout_keyword_is_case_insensitive(resolver: AppenderResolver, token: str) -> None:
    handler = resolver.resolve(token)

    assert isinstance(handler, logging.StreamHandler)
    assert handler.stream is sys.stdout
    assert describe_handler(handler) == "stdout"


def test_stderr_keyword(resolver: AppenderResolver) -> None:
    handler = resolver.resolve("Stderr")

    assert handler.stream is sys.stderr
    assert describe_handler(handler) == "stderr"


def test_stream_handlers_are_shared(resolver: AppenderResolver) -> None:
    assert resolver.resolve("stdout") is resolver.resolve("STDOUT")
    assert resolver.resolve("stdout") is not resolver.resolve("stderr")


def test_file_path_creates_rotating_handler(resolver: AppenderResolver, tmp_path: Path) -> None:
    path = tmp_path / "logs" / "net.log"
    handler = resolver.resolve(str(path))

    assert isinstance(handler, RotatingFileHandler)
    assert describe_handler(handler) == str(path)
    assert path.parent.is_dir()
    # Opened lazily on the first record
    assert not path.exists()


def test_same_file_is_reused(resolver: AppenderResolver, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    first = resolver.resolve("app.log")
    second = resolver.resolve("./sub/../app.log")

    assert first is second
    assert len(resolver.handlers()) == 1


def test_file_named_like_keyword_prefix_is_a_path(resolver: AppenderResolver, tmp_path: Path) -> None:
    handler = resolver.resolve(str(tmp_path / "stdout.log"))

    assert isinstance(handler, RotatingFileHandler)


@pytest.mark.parametrize("token", [None, 42, "", ["stdout"]])
def test_invalid_tokens(resolver: AppenderResolver, token: object) -> None:
    with pytest.raises(UnknownAppenderSpec):
        resolver.resolve(token)


def test_handlers_are_tagged_and_formatted(tmp_path: Path) -> None:
    resolver = AppenderResolver(SinkConfig(fmt="%(levelname)s %(message)s"))
    handler = resolver.resolve("stdout")

    assert is_our_handler(handler)
    assert not is_our_handler(logging.NullHandler())
    assert describe_handler(logging.NullHandler()) == "NullHandler"
    record = logging.LogRecord("x", logging.INFO, "", 0, "hello", None, None)
    assert handler.format(record) == "INFO hello"
    resolver.close()


def test_close_releases_handlers(tmp_path: Path) -> None:
    resolver = AppenderResolver(SinkConfig(delay=False))
    handler = resolver.resolve(str(tmp_path / "open.log"))
    assert handler.stream is not None

    resolver.close()

    assert handler.stream is None
    assert resolver.handlers() == []
