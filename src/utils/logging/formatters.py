"""
Custom log formatters for structured and console logging.

Provides a JSON formatter for machine-readable logs and a console
formatter with optional colors for humans.
"""

import json
import logging
import socket
import sys
import traceback
from datetime import UTC, datetime

# Attributes every LogRecord carries; anything else came from ``extra``
RESERVED_ATTRIBUTES = frozenset({
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName", "asctime",
})


def extra_fields(record: logging.LogRecord) -> dict:
    """Return the user supplied context attached to a log record."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in RESERVED_ATTRIBUTES and not key.startswith("_")
    }


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging

    Outputs log records as one JSON object per line, with any ``extra``
    context nested under ``context``.
    """

    def __init__(
        self,
        include_timestamp: bool = True,
        include_hostname: bool = True,
        app_name: str = "row-validation",
    ):
        """
        Initialize JSON formatter

        Args:
            include_timestamp: Include ISO8601 timestamp
            include_hostname: Include hostname in log records
            app_name: Application name to include in logs
        """
        super().__init__()
        self.include_timestamp = include_timestamp
        self.include_hostname = include_hostname
        self.app_name = app_name
        self.hostname = socket.gethostname() if include_hostname else None

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "app": self.app_name,
        }

        if self.include_timestamp:
            log_data["timestamp"] = datetime.fromtimestamp(
                record.created, UTC
            ).isoformat()

        if self.include_hostname and self.hostname:
            log_data["hostname"] = self.hostname

        log_data["source"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
        }

        log_data["process"] = {
            "pid": record.process,
            "thread_name": record.threadName,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        context = extra_fields(record)
        if context:
            log_data["context"] = context

        return json.dumps(log_data, default=str)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable console formatter

    Colors the level name when writing to a terminal and appends
    ``extra`` context as ``key=value`` pairs.
    """

    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        original_levelname = record.levelname
        if self.use_colors and original_levelname in self.COLORS:
            record.levelname = f"{self.COLORS[original_levelname]}{original_levelname}{self.RESET}"

        try:
            formatted = super().format(record)
        finally:
            record.levelname = original_levelname

        context = extra_fields(record)
        if context:
            pairs = ", ".join(f"{key}={value}" for key, value in context.items())
            formatted += f" [{pairs}]"

        return formatted
