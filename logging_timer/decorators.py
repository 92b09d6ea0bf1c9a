"""Decorators that time every call of a function.

Usage:
    @time
    def find_files(): ...                 # "find_files", DEBUG, finished only

    @stime("info", "Loader::{}")
    def load(): ...                       # "Loader::load", INFO, starting + finished

    @stime("never")
    def hot_path(): ...                   # returned unwrapped, nothing logged

Configuration is validated when the decorator is applied, so a bad level or
pattern fails at import time rather than on the first call.
"""

from __future__ import annotations

import functools
import inspect
from typing import Any, Callable, TypeVar

from .bridge import CallSite
from .exceptions import InvalidLevelError, InvalidPatternError
from .levels import NEVER, Level, is_level_name, parse_level
from .settings import get_settings
from .timing import make_timer

F = TypeVar("F", bound=Callable[..., Any])

MARKER = "{}"
DEFAULT_PATTERN = MARKER

_EXPECTED = "expected ([level], [pattern]) with level one of error/warn/info/debug/trace/never"


def _resolve_level(value: Any) -> Level | str:
    if isinstance(value, str) and value.strip().lower() == NEVER:
        return NEVER
    try:
        return parse_level(value)
    except InvalidLevelError as exc:
        raise InvalidLevelError(
            f"Invalid decorator level {value!r}; {_EXPECTED}.", value
        ) from exc


def _check_pattern(pattern: Any) -> str:
    if not isinstance(pattern, str):
        raise InvalidPatternError(
            f"Invalid name pattern {pattern!r}: expected a string such as 'Prefix::{MARKER}'.",
            pattern,
        )
    if pattern.count(MARKER) > 1:
        raise InvalidPatternError(
            f"Invalid name pattern {pattern!r}: at most one '{MARKER}' marker is allowed.",
            pattern,
        )
    return pattern


def parse_config(config: tuple[Any, ...]) -> tuple[Level | str | None, str]:
    """Split decorator arguments into (level, pattern).

    Level is None when not given; it may also be the ``"never"`` sentinel.
    """
    if len(config) > 2:
        raise InvalidPatternError(
            f"Too many decorator arguments ({len(config)}): {config!r}; {_EXPECTED}.",
            config,
        )
    if not config:
        return None, DEFAULT_PATTERN
    if len(config) == 1:
        (arg,) = config
        if isinstance(arg, Level) or is_level_name(arg):
            return _resolve_level(arg), DEFAULT_PATTERN
        if isinstance(arg, int) and not isinstance(arg, bool):
            return _resolve_level(arg), DEFAULT_PATTERN
        return None, _check_pattern(arg)

    first, second = config
    if isinstance(first, str) and MARKER in first:
        raise InvalidPatternError(
            f"First argument {first!r} looks like a name pattern, but with two arguments "
            f"the first must be a level and the second the pattern; {_EXPECTED}.",
            first,
        )
    return _resolve_level(first), _check_pattern(second)


def timer_name(pattern: str, func: Callable[..., Any]) -> str:
    return pattern.replace(MARKER, getattr(func, "__name__", "<anonymous>"), 1)


def _decorate(announce: bool, config: tuple[Any, ...]) -> Any:
    # Bare use: @time / @stime
    if len(config) == 1 and callable(config[0]) and not isinstance(config[0], (str, Level)):
        return _decorate(announce, ())(config[0])

    level, pattern = parse_config(config)
    if level is None:
        level = get_settings().timer_level

    def decorator(func: F) -> F:
        if level == NEVER:
            return func

        name = timer_name(pattern, func)
        callsite = CallSite.of_function(func)

        # Generators are timed from first resumption until exhausted or closed.
        if inspect.isasyncgenfunction(func):

            @functools.wraps(func)
            async def async_gen_wrapper(*args: Any, **kwargs: Any) -> Any:
                with make_timer(name, level=level, callsite=callsite, announce=announce):
                    async for item in func(*args, **kwargs):
                        yield item

            return async_gen_wrapper  # type: ignore[return-value]

        if inspect.isgeneratorfunction(func):

            @functools.wraps(func)
            def gen_wrapper(*args: Any, **kwargs: Any) -> Any:
                with make_timer(name, level=level, callsite=callsite, announce=announce):
                    return (yield from func(*args, **kwargs))

            return gen_wrapper  # type: ignore[return-value]

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                with make_timer(name, level=level, callsite=callsite, announce=announce):
                    return await func(*args, **kwargs)

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            with make_timer(name, level=level, callsite=callsite, announce=announce):
                return func(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def time(*config: Any) -> Any:
    """Time each call of the decorated function, logging ``TimerFinished`` on return.

    Accepts ``()``, ``(level)``, ``(pattern)`` or ``(level, pattern)``. The
    pattern's ``{}`` marker is replaced by the function name.
    """
    return _decorate(False, config)


def stime(*config: Any) -> Any:
    """Like :func:`time`, but also logs ``TimerStarting`` when each call begins."""
    return _decorate(True, config)


__all__ = ["parse_config", "stime", "time", "timer_name"]
