"""
bootstrap/log_setup.py - Logging setup for host applications

The library only creates module loggers; handlers are attached here, on
request, by whatever process embeds the evaluator.
"""

from __future__ import annotations
from typing import List, Optional
import json
import logging
import sys

from .config import DEFAULT_LOG_FORMAT, LoggingConfig


class JSONFormatter(logging.Formatter):
    """Render each record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    json_format: bool = False,
    fmt: str = DEFAULT_LOG_FORMAT,
) -> logging.Logger:
    """
    Attach a stdout handler (and optionally a file handler) to the root logger.

    Args:
        level: Level name; unknown names mean INFO
        log_file: Also write to this file when given
        json_format: Emit JSON lines instead of ``fmt``
        fmt: Format string for plain-text output

    Returns:
        The root logger
    """
    log_level = getattr(logging, level.upper(), logging.INFO)
    formatter = JSONFormatter() if json_format else logging.Formatter(fmt)

    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    root = logging.getLogger()
    root.setLevel(log_level)
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.setLevel(log_level)
        root.addHandler(handler)

    return root


def setup_logging_from_config(config: LoggingConfig) -> logging.Logger:
    """Configure logging from a LoggingConfig."""
    return setup_logging(
        level=config.level,
        log_file=config.log_file,
        json_format=config.json_logs,
        fmt=config.format,
    )
