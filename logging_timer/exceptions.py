"""Exception hierarchy for logging_timer configuration errors."""

from __future__ import annotations


class TimerConfigError(ValueError):
    """Base error for invalid timer or decorator configuration."""

    pass


class InvalidLevelError(TimerConfigError):
    """A level name or value could not be resolved."""

    def __init__(self, message: str, value: object = None):
        self.value = value
        super().__init__(message)


class InvalidPatternError(TimerConfigError):
    """A decorator name pattern or argument combination is malformed."""

    def __init__(self, message: str, pattern: object = None):
        self.pattern = pattern
        super().__init__(message)
