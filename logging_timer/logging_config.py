"""Log sink configuration for timer output."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from .levels import LevelLike, parse_level
from .settings import get_settings

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] [%(pathname)s/%(lineno)d] %(message)s"
RICH_FORMAT = "[%(name)s] %(message)s"


class StructuredFormatter(logging.Formatter):
    """Formatter that outputs JSON-structured log records."""

    def format(self, record: logging.LogRecord) -> str:
        log_dict: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "file": record.pathname,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        # Timer fields (timer_target, timer_name, module_path, elapsed_ms)
        if hasattr(record, "extra_fields"):
            log_dict.update(record.extra_fields)

        if record.exc_info:
            log_dict["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_dict)


_handler: logging.Handler | None = None


def configure_logging(
    level: LevelLike | None = None,
    structured: bool | None = None,
    rich: bool | None = None,
) -> logging.Handler:
    """Install a stderr handler on the root logger.

    Arguments left as None fall back to settings (``LOGGING_TIMER_LOG_LEVEL``,
    ``LOGGING_TIMER_STRUCTURED``, ``LOGGING_TIMER_RICH``). Calling again
    returns the already installed handler.
    """
    global _handler
    if _handler is not None:
        return _handler

    settings = get_settings()
    root_level = settings.root_level if level is None else parse_level(level)
    structured = settings.structured if structured is None else structured
    rich = settings.rich if rich is None else rich

    root_logger = logging.getLogger()
    root_logger.setLevel(int(root_level))

    handler: logging.Handler
    if structured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(StructuredFormatter())
    elif rich:
        handler = RichHandler(console=Console(stderr=True), show_time=True, show_path=False)
        handler.setFormatter(logging.Formatter(RICH_FORMAT))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root_logger.addHandler(handler)
    _handler = handler
    return handler


def reset_logging() -> None:
    """Remove the handler installed by configure_logging (useful for testing)."""
    global _handler
    if _handler is not None:
        logging.getLogger().removeHandler(_handler)
        _handler = None


__all__ = ["RICH_FORMAT", "StructuredFormatter", "TEXT_FORMAT", "configure_logging", "reset_logging"]
