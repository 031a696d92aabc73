"""
Logging configuration for the row validation tool.

Provides setup functions for configuring application-wide logging
with support for file rotation, console output, and JSON formatting.
"""

import logging
import logging.handlers
import os
import sys

from .formatters import ConsoleFormatter, JSONFormatter

APP_NAME = "row-validation"

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("urllib3", "opentelemetry", "prometheus_client")


def _build_formatter(json_format: bool, app_name: str, console: bool) -> logging.Formatter:
    if json_format:
        return JSONFormatter(
            include_timestamp=True,
            include_hostname=True,
            app_name=app_name,
        )
    if console:
        return ConsoleFormatter(use_colors=True)
    return logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    console_output: bool = True,
    json_format: bool = False,
    app_name: str = APP_NAME,
    max_bytes: int = 50 * 1024 * 1024,  # 50MB
    backup_count: int = 5,
) -> None:
    """
    Configure logging for the application

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Path to log file (if None, file logging is disabled)
        console_output: Whether to output to stderr
        json_format: Use JSON format for both console and file logs
        app_name: Application name for log context
        max_bytes: Maximum log file size before rotation
        backup_count: Number of rotated log files to keep
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Replace handlers from any previous setup
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)
        console_handler.setFormatter(_build_formatter(json_format, app_name, console=True))
        root_logger.addHandler(console_handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            filename=log_file,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(_build_formatter(json_format, app_name, console=False))
        root_logger.addHandler(file_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger = logging.getLogger(__name__)
    logger.debug(
        f"Logging initialized: level={level}, file={log_file or 'none'}, "
        f"console={console_output}, json={json_format}"
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance

    Args:
        name: Logger name (typically __name__)

    Returns:
        Logger instance
    """
    return logging.getLogger(name)


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def configure_from_env() -> None:
    """
    Configure logging from environment variables

    Environment variables:
        LOG_LEVEL: Log level (default: INFO)
        LOG_FILE: Log file path (default: none)
        LOG_JSON: Use JSON format (default: false)
        LOG_CONSOLE: Enable console output (default: true)
    """
    setup_logging(
        level=os.getenv("LOG_LEVEL", "INFO"),
        log_file=os.getenv("LOG_FILE"),
        console_output=_env_flag("LOG_CONSOLE", "true"),
        json_format=_env_flag("LOG_JSON", "false"),
    )
