"""Tests for log sink configuration."""

from __future__ import annotations

import json
import logging

import pytest
from rich.logging import RichHandler

from logging_timer import (
    Level,
    StdlibLogBridge,
    configure_logging,
    reset_logging,
    reset_settings,
    timer,
)
from logging_timer.logging_config import TEXT_FORMAT, StructuredFormatter


@pytest.fixture
def root_level():
    root = logging.getLogger()
    previous = root.level
    yield root
    root.setLevel(previous)


def test_structured_formatter_includes_timer_fields(root_level: logging.Logger) -> None:
    records: list[logging.LogRecord] = []

    class _Collect(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            records.append(record)

    logger = logging.getLogger("tests_config_a")
    logger.setLevel(logging.DEBUG)
    handler = _Collect()
    logger.addHandler(handler)
    try:
        with timer("JSON", "extra", level=Level.INFO, bridge=StdlibLogBridge("tests_config_a")):
            pass
    finally:
        logger.removeHandler(handler)

    payload = json.loads(StructuredFormatter().format(records[0]))
    assert payload["level"] == "INFO"
    assert payload["logger"] == "tests_config_a.TimerFinished"
    assert payload["timer_target"] == "TimerFinished"
    assert payload["timer_name"] == "JSON"
    assert payload["module_path"] == __name__
    assert payload["file"] == __file__
    assert payload["message"].startswith("JSON, Elapsed=")
    assert payload["elapsed_ms"] >= 0


def test_configure_is_idempotent(root_level: logging.Logger) -> None:
    handler = configure_logging(level="debug")
    assert configure_logging(level="error") is handler
    assert handler in root_level.handlers
    assert root_level.level == logging.DEBUG
    assert handler.formatter._fmt == TEXT_FORMAT
    reset_logging()
    assert handler not in root_level.handlers


def test_structured_option(root_level: logging.Logger) -> None:
    handler = configure_logging(structured=True)
    assert isinstance(handler.formatter, StructuredFormatter)


def test_rich_option(root_level: logging.Logger) -> None:
    handler = configure_logging(rich=True)
    assert isinstance(handler, RichHandler)


def test_settings_drive_defaults(
    root_level: logging.Logger, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("LOGGING_TIMER_LOG_LEVEL", "warn")
    monkeypatch.setenv("LOGGING_TIMER_STRUCTURED", "1")
    reset_settings()
    handler = configure_logging()
    assert root_level.level == logging.WARNING
    assert isinstance(handler.formatter, StructuredFormatter)
