"""Bridge between timers and the logging backend.

This module provides:
- TimerTarget: the three record categories (Starting, Executing, Finished)
- CallSite: file / module / line where a timer was created
- LogBridge: abstract backend with an enablement gate and an emit hook
- StdlibLogBridge: routes records into the stdlib ``logging`` module (default)

To route timer records somewhere else:
    from logging_timer.bridge import set_log_bridge
    set_log_bridge(MyBridge())
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .levels import Level
from .settings import get_settings


class TimerTarget(str, Enum):
    """Lifecycle phase of a timer; used as the record's target/category."""

    STARTING = "TimerStarting"
    EXECUTING = "TimerExecuting"
    FINISHED = "TimerFinished"


@dataclass(frozen=True)
class CallSite:
    """Source location where a timer was created."""

    file: str
    module_path: str
    line: int
    function: str | None = None

    @classmethod
    def capture(cls, depth: int = 1) -> "CallSite":
        """Capture the frame ``depth`` levels above the caller of this method."""
        frame = sys._getframe(depth + 1)
        code = frame.f_code
        return cls(
            file=code.co_filename,
            module_path=frame.f_globals.get("__name__", "<unknown>"),
            line=frame.f_lineno,
            function=code.co_name,
        )

    @classmethod
    def of_function(cls, func: Callable[..., Any]) -> "CallSite":
        """Definition site of ``func``."""
        code = getattr(func, "__code__", None)
        return cls(
            file=code.co_filename if code else "<unknown>",
            module_path=getattr(func, "__module__", None) or "<unknown>",
            line=code.co_firstlineno if code else 0,
            function=getattr(func, "__name__", None),
        )


@dataclass(frozen=True)
class TimerRecord:
    """One fully rendered timer log record."""

    level: Level
    target: TimerTarget
    callsite: CallSite
    name: str
    message: str
    elapsed_ns: int | None = None

    def fields(self) -> dict[str, Any]:
        """Structured fields attached alongside the message."""
        fields: dict[str, Any] = {
            "timer_target": self.target.value,
            "timer_name": self.name,
            "module_path": self.callsite.module_path,
        }
        if self.elapsed_ns is not None:
            fields["elapsed_ms"] = self.elapsed_ns / 1_000_000
        return fields


_DURATION_UNITS = ((1_000_000_000, "s", 9), (1_000_000, "ms", 6), (1_000, "µs", 3))


def format_duration(nanos: int) -> str:
    """Render a duration with the largest fitting unit, e.g. ``28.835275ms``."""
    for unit_ns, suffix, digits in _DURATION_UNITS:
        if nanos >= unit_ns:
            whole, frac = divmod(nanos, unit_ns)
            if not frac:
                return f"{whole}{suffix}"
            return f"{whole}.{str(frac).zfill(digits).rstrip('0')}{suffix}"
    return f"{max(nanos, 0)}ns"


def format_message(
    target: TimerTarget,
    name: str,
    elapsed_ns: int | None = None,
    extra_info: str | None = None,
    extra_args: str | None = None,
) -> str:
    """Build the message text for one record.

    Field order is fixed: name, elapsed (not for Starting), extra_info,
    extra_args. The two extras are each omitted when None.
    """
    parts = [name]
    if target is not TimerTarget.STARTING:
        parts.append(f"Elapsed={format_duration(elapsed_ns or 0)}")
    if extra_info is not None:
        parts.append(extra_info)
    if extra_args is not None:
        parts.append(extra_args)
    return ", ".join(parts)


class LogBridge(ABC):
    """Abstract logging backend for timer records."""

    @abstractmethod
    def is_enabled(self, level: Level) -> bool:
        """Cheap check whether records at ``level`` would be emitted."""
        ...

    @abstractmethod
    def emit(self, record: TimerRecord) -> None:
        """Ship one rendered record to the sink."""
        ...

    def log(
        self,
        level: Level,
        target: TimerTarget,
        callsite: CallSite,
        name: str,
        elapsed_ns: int | None = None,
        extra_info: str | None = None,
        extra_args: str | None = None,
    ) -> None:
        """Render and emit a record, doing nothing at all if ``level`` is disabled."""
        if not self.is_enabled(level):
            return
        if target is TimerTarget.STARTING:
            elapsed_ns = None
        message = format_message(target, name, elapsed_ns, extra_info, extra_args)
        self.emit(
            TimerRecord(
                level=level,
                target=target,
                callsite=callsite,
                name=name,
                message=message,
                elapsed_ns=elapsed_ns,
            )
        )


class StdlibLogBridge(LogBridge):
    """Emit timer records through the stdlib ``logging`` module.

    Each phase has its own logger, ``<base_name>.TimerStarting`` and so on,
    so sinks can filter on the logger name. Enablement is decided by the
    base logger; the phase logger is checked again before emitting.
    """

    def __init__(self, base_name: str = "logging_timer"):
        self.base_name = base_name
        self._base = logging.getLogger(base_name)
        self._loggers = {
            target: logging.getLogger(f"{base_name}.{target.value}") for target in TimerTarget
        }

    def is_enabled(self, level: Level) -> bool:
        return self._base.isEnabledFor(int(level))

    def emit(self, record: TimerRecord) -> None:
        logger = self._loggers[record.target]
        if not logger.isEnabledFor(int(record.level)):
            return
        log_record = logger.makeRecord(
            logger.name,
            int(record.level),
            record.callsite.file,
            record.callsite.line,
            record.message,
            None,
            None,
            func=record.callsite.function,
            extra={"extra_fields": record.fields()},
        )
        logger.handle(log_record)


# Global singleton
_log_bridge: LogBridge | None = None


def get_log_bridge() -> LogBridge:
    """Get the global bridge, creating a StdlibLogBridge on first use.

    The base logger name comes from ``LOGGING_TIMER_LOGGER_NAME``.
    """
    global _log_bridge
    if _log_bridge is None:
        _log_bridge = StdlibLogBridge(get_settings().logger_name)
    return _log_bridge


def set_log_bridge(bridge: LogBridge) -> None:
    """Set the global bridge."""
    global _log_bridge
    _log_bridge = bridge


def reset_log_bridge() -> None:
    """Reset the global bridge to None.

    The next call to get_log_bridge() will re-initialize from settings.
    Useful for testing.
    """
    global _log_bridge
    _log_bridge = None


__all__ = [
    "CallSite",
    "LogBridge",
    "StdlibLogBridge",
    "TimerRecord",
    "TimerTarget",
    "format_duration",
    "format_message",
    "get_log_bridge",
    "reset_log_bridge",
    "set_log_bridge",
]
