"""Timer severity levels and their mapping onto stdlib logging."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Union

from .exceptions import InvalidLevelError

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")

# Decorator-only level: the wrapped function is returned untouched.
NEVER = "never"


class Level(IntEnum):
    """Ordered verbosity levels. Values are stdlib logging levels."""

    ERROR = logging.ERROR
    WARN = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = TRACE_LEVEL


_NAMES: dict[str, Level] = {
    "error": Level.ERROR,
    "warn": Level.WARN,
    "warning": Level.WARN,
    "info": Level.INFO,
    "debug": Level.DEBUG,
    "trace": Level.TRACE,
}

LevelLike = Union[Level, int, str]


def is_level_name(value: object) -> bool:
    """Return True if ``value`` is a string naming a level (``"never"`` included)."""
    if not isinstance(value, str):
        return False
    normalized = value.strip().lower()
    return normalized in _NAMES or normalized == NEVER


def parse_level(value: LevelLike) -> Level:
    """Resolve a ``Level``, stdlib logging int or case-insensitive name.

    Raises:
        InvalidLevelError: if ``value`` does not name one of the five levels.
    """
    if isinstance(value, Level):
        return value
    if isinstance(value, bool):
        raise InvalidLevelError(f"Invalid level {value!r}: expected a level, not a bool.", value)
    if isinstance(value, int):
        try:
            return Level(value)
        except ValueError:
            raise InvalidLevelError(
                f"Invalid level {value!r}: expected one of "
                f"{', '.join(str(int(lvl)) for lvl in Level)}.",
                value,
            ) from None
    if isinstance(value, str):
        level = _NAMES.get(value.strip().lower())
        if level is not None:
            return level
    raise InvalidLevelError(
        f"Invalid level {value!r}: expected one of {', '.join(sorted(_NAMES))}.",
        value,
    )


__all__ = ["Level", "LevelLike", "NEVER", "TRACE_LEVEL", "is_level_name", "parse_level"]
