"""Scoped timers that log their elapsed time.

A timer logs a ``TimerFinished`` record exactly once: either when ``finish``
is called, or when the ``with`` block that owns it exits. ``stimer`` also
logs a ``TimerStarting`` record on creation, and ``executing`` logs
intermediate ``TimerExecuting`` records while the timer runs.

Usage:
    with timer("Find Files", "Dir = {}", path) as tmr:
        for sub in sub_dirs(path):
            executing(tmr, "Processed {}", sub)
        finish(tmr, "Found {} files", len(files))

Timers must be owned by a ``with`` block (or finished explicitly on every
exit path); Python gives no guarantee about when an object is destroyed.
"""

from __future__ import annotations

import threading
import time
from typing import Any

from .bridge import CallSite, LogBridge, TimerTarget, get_log_bridge
from .levels import Level, LevelLike, parse_level
from .settings import get_settings


def _render(fmt: Any, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str | None:
    if fmt is None:
        return None
    if args or kwargs:
        return str(fmt).format(*args, **kwargs)
    return str(fmt)


class LoggingTimer:
    """Logs its name and elapsed time when finished.

    Usually created through ``timer()`` / ``stimer()``, which also skip
    construction entirely when the level is disabled.
    """

    def __init__(
        self,
        name: str,
        level: LevelLike = Level.DEBUG,
        extra_info: str | None = None,
        callsite: CallSite | None = None,
        bridge: LogBridge | None = None,
    ):
        # Taken before anything else so logging overhead is not measured.
        self._start_ns = time.perf_counter_ns()
        self._level = parse_level(level)
        self._name = name
        self._extra_info = extra_info
        self._callsite = callsite if callsite is not None else CallSite.capture(1)
        self._bridge = bridge if bridge is not None else get_log_bridge()
        self._finished = False
        self._lock = threading.Lock()

    @classmethod
    def with_start_message(
        cls,
        name: str,
        level: LevelLike = Level.DEBUG,
        extra_info: str | None = None,
        callsite: CallSite | None = None,
        bridge: LogBridge | None = None,
    ) -> "LoggingTimer":
        """Construct a timer and log its ``TimerStarting`` record before returning."""
        if callsite is None:
            callsite = CallSite.capture(1)
        tmr = cls(name, level, extra_info, callsite, bridge)
        tmr._log(TimerTarget.STARTING, None, (), {})
        return tmr

    @property
    def name(self) -> str:
        return self._name

    @property
    def level(self) -> Level:
        return self._level

    @property
    def callsite(self) -> CallSite:
        return self._callsite

    @property
    def extra_info(self) -> str | None:
        return self._extra_info

    @property
    def finished(self) -> bool:
        return self._finished

    def elapsed_ns(self) -> int:
        return time.perf_counter_ns() - self._start_ns

    def elapsed(self) -> float:
        """Seconds since the timer was created."""
        return self.elapsed_ns() / 1_000_000_000

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed_ns() / 1_000_000

    def executing(self, fmt: Any = None, *args: Any, **kwargs: Any) -> None:
        """Log a ``TimerExecuting`` record with the current elapsed time.

        May be called any number of times; ignored once the timer has finished.
        """
        with self._lock:
            if self._finished:
                return
            self._log(TimerTarget.EXECUTING, fmt, args, kwargs)

    def finish(self, fmt: Any = None, *args: Any, **kwargs: Any) -> None:
        """Log the ``TimerFinished`` record. Only the first call has any effect."""
        with self._lock:
            if self._finished:
                return
            self._finished = True
            # Held while logging so no executing record can follow this one.
            self._log(TimerTarget.FINISHED, fmt, args, kwargs)

    def _log(
        self,
        target: TimerTarget,
        fmt: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> None:
        if not self._bridge.is_enabled(self._level):
            return
        elapsed_ns = None if target is TimerTarget.STARTING else self.elapsed_ns()
        self._bridge.log(
            self._level,
            target,
            self._callsite,
            self._name,
            elapsed_ns=elapsed_ns,
            extra_info=self._extra_info,
            extra_args=_render(fmt, args, kwargs),
        )

    def __enter__(self) -> "LoggingTimer":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.finish()

    def __repr__(self) -> str:
        return (
            f"LoggingTimer(name={self._name!r}, level={self._level.name}, "
            f"finished={self._finished})"
        )


class NullTimer:
    """Inert timer returned when the requested level is disabled.

    Supports the whole LoggingTimer surface as no-ops and is falsy, so
    ``if tmr:`` tells whether anything will be logged.
    """

    name = ""
    level: Level | None = None
    callsite: CallSite | None = None
    extra_info: str | None = None
    finished = True
    elapsed_ms = 0.0

    def elapsed_ns(self) -> int:
        return 0

    def elapsed(self) -> float:
        return 0.0

    def executing(self, fmt: Any = None, *args: Any, **kwargs: Any) -> None:
        pass

    def finish(self, fmt: Any = None, *args: Any, **kwargs: Any) -> None:
        pass

    def __bool__(self) -> bool:
        return False

    def __enter__(self) -> "NullTimer":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass

    def __repr__(self) -> str:
        return "NullTimer()"


NULL_TIMER = NullTimer()

AnyTimer = LoggingTimer | NullTimer


def _resolve(level: LevelLike | None) -> Level:
    return get_settings().timer_level if level is None else parse_level(level)


def _build(
    announce: bool,
    name: str,
    level: Level,
    extra_info: str | None,
    callsite: CallSite,
    bridge: LogBridge,
) -> LoggingTimer:
    if announce:
        return LoggingTimer.with_start_message(name, level, extra_info, callsite, bridge)
    return LoggingTimer(name, level, extra_info, callsite, bridge)


def make_timer(
    name: str,
    *,
    callsite: CallSite,
    level: LevelLike | None = None,
    announce: bool = False,
    extra_info: str | None = None,
    bridge: LogBridge | None = None,
) -> AnyTimer:
    """Create a timer for an explicit call site, or NULL_TIMER if ``level`` is disabled."""
    resolved = _resolve(level)
    bridge = bridge if bridge is not None else get_log_bridge()
    if not bridge.is_enabled(resolved):
        return NULL_TIMER
    return _build(announce, name, resolved, extra_info, callsite, bridge)


def _open(
    announce: bool,
    name: str,
    fmt: Any,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    level: LevelLike | None,
    bridge: LogBridge | None,
) -> AnyTimer:
    resolved = _resolve(level)
    bridge = bridge if bridge is not None else get_log_bridge()
    if not bridge.is_enabled(resolved):
        return NULL_TIMER
    # caller of timer()/stimer()
    callsite = CallSite.capture(2)
    return _build(announce, name, resolved, _render(fmt, args, kwargs), callsite, bridge)


def timer(
    name: str,
    fmt: Any = None,
    *args: Any,
    level: LevelLike | None = None,
    bridge: LogBridge | None = None,
    **kwargs: Any,
) -> AnyTimer:
    """Open a timer that logs only a ``TimerFinished`` record.

    ``fmt``/``args``/``kwargs`` are a ``str.format`` template giving extra
    information that is repeated in every record of this timer.
    """
    return _open(False, name, fmt, args, kwargs, level, bridge)


def stimer(
    name: str,
    fmt: Any = None,
    *args: Any,
    level: LevelLike | None = None,
    bridge: LogBridge | None = None,
    **kwargs: Any,
) -> AnyTimer:
    """Open a timer that logs ``TimerStarting`` immediately and ``TimerFinished`` at the end."""
    return _open(True, name, fmt, args, kwargs, level, bridge)


def executing(tmr: AnyTimer, fmt: Any = None, *args: Any, **kwargs: Any) -> None:
    """Make ``tmr`` log a ``TimerExecuting`` record."""
    tmr.executing(fmt, *args, **kwargs)


def finish(tmr: AnyTimer, fmt: Any = None, *args: Any, **kwargs: Any) -> None:
    """Make ``tmr`` log its ``TimerFinished`` record now and suppress the one at scope exit."""
    tmr.finish(fmt, *args, **kwargs)


# Operation-style names
open_timer = timer
open_announced_timer = stimer
report_progress = executing
complete = finish


__all__ = [
    "AnyTimer",
    "LoggingTimer",
    "NULL_TIMER",
    "NullTimer",
    "complete",
    "executing",
    "finish",
    "make_timer",
    "open_announced_timer",
    "open_timer",
    "report_progress",
    "stimer",
    "timer",
]
