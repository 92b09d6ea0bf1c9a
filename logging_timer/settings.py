"""Configuration settings using pydantic-settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings

from .levels import Level, parse_level


class TimerSettings(BaseSettings):
    """Env-backed defaults for timers and log sink setup.

    Every field can be overridden with a ``LOGGING_TIMER_`` prefixed
    environment variable, e.g. ``LOGGING_TIMER_DEFAULT_LEVEL=info``.
    """

    # Level used by timer()/stimer()/@time when none is given
    default_level: str = "debug"
    # Base logger; phase loggers are "<logger_name>.TimerStarting" etc.
    logger_name: str = "logging_timer"

    # Used by configure_logging()
    log_level: str = "info"
    structured: bool = False
    rich: bool = False

    model_config = {"env_prefix": "LOGGING_TIMER_", "extra": "ignore"}

    @field_validator("default_level", "log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        parse_level(value)
        return value.strip().lower()

    @property
    def timer_level(self) -> Level:
        return parse_level(self.default_level)

    @property
    def root_level(self) -> Level:
        return parse_level(self.log_level)


@lru_cache(maxsize=1)
def get_settings() -> TimerSettings:
    """Return the process-wide settings, loading them from the environment once."""
    return TimerSettings()


def reset_settings() -> None:
    """Drop cached settings so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()


__all__ = ["TimerSettings", "get_settings", "reset_settings"]
