"""Shared fixtures: a recording bridge and global state resets."""

from __future__ import annotations

from typing import Iterator, List

import pytest

from logging_timer.bridge import LogBridge, TimerRecord, TimerTarget, reset_log_bridge, set_log_bridge
from logging_timer.levels import Level
from logging_timer.logging_config import reset_logging
from logging_timer.settings import reset_settings


class RecordingBridge(LogBridge):
    """Collects rendered records in memory; enabled at ``threshold`` and above."""

    def __init__(self, threshold: Level = Level.TRACE) -> None:
        self.threshold = threshold
        self.records: List[TimerRecord] = []
        self.enabled_checks = 0

    def is_enabled(self, level: Level) -> bool:
        self.enabled_checks += 1
        return int(level) >= int(self.threshold)

    def emit(self, record: TimerRecord) -> None:
        self.records.append(record)

    def targets(self) -> List[TimerTarget]:
        return [record.target for record in self.records]

    def of(self, target: TimerTarget) -> List[TimerRecord]:
        return [record for record in self.records if record.target is target]


class ExplodingFormat:
    """Fails the test if it is ever formatted into a message."""

    def __init__(self) -> None:
        self.formatted = 0

    def __format__(self, spec: str) -> str:
        self.formatted += 1
        raise AssertionError("formatted while the timer level was disabled")


@pytest.fixture(autouse=True)
def _reset_globals(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in (
        "LOGGING_TIMER_DEFAULT_LEVEL",
        "LOGGING_TIMER_LOGGER_NAME",
        "LOGGING_TIMER_LOG_LEVEL",
        "LOGGING_TIMER_STRUCTURED",
        "LOGGING_TIMER_RICH",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_settings()
    reset_log_bridge()
    yield
    reset_logging()
    reset_log_bridge()
    reset_settings()


@pytest.fixture
def bridge() -> RecordingBridge:
    """A recording bridge installed as the global bridge."""
    recorder = RecordingBridge()
    set_log_bridge(recorder)
    return recorder
