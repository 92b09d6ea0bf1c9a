# Scoped logging timers
from .bridge import (
    CallSite,
    LogBridge,
    StdlibLogBridge,
    TimerRecord,
    TimerTarget,
    get_log_bridge,
    reset_log_bridge,
    set_log_bridge,
)
from .decorators import stime, time
from .exceptions import InvalidLevelError, InvalidPatternError, TimerConfigError
from .levels import NEVER, Level, parse_level
from .logging_config import configure_logging, reset_logging
from .settings import TimerSettings, get_settings, reset_settings
from .timing import (
    NULL_TIMER,
    LoggingTimer,
    NullTimer,
    complete,
    executing,
    finish,
    open_announced_timer,
    open_timer,
    report_progress,
    stimer,
    timer,
)

__all__ = [
    "CallSite",
    "InvalidLevelError",
    "InvalidPatternError",
    "Level",
    "LogBridge",
    "LoggingTimer",
    "NEVER",
    "NULL_TIMER",
    "NullTimer",
    "StdlibLogBridge",
    "TimerConfigError",
    "TimerRecord",
    "TimerSettings",
    "TimerTarget",
    "complete",
    "configure_logging",
    "executing",
    "finish",
    "get_log_bridge",
    "get_settings",
    "open_announced_timer",
    "open_timer",
    "parse_level",
    "report_progress",
    "reset_log_bridge",
    "reset_logging",
    "reset_settings",
    "set_log_bridge",
    "stime",
    "stimer",
    "time",
    "timer",
]
