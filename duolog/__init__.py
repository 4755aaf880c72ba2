"""duolog: named loggers writing colored console lines and an optional log file.

This module exposes the logger factories plus configuration functions
that act on the process-wide default configuration:
- set_log_file / clear_log_file
- set_log_level
- set_datetime_format
- get_level_color / set_level_color

Tests and embedding applications can build their own LogConfig and pass
it to get_logger instead.
"""

from typing import Any

from rich.color import Color

from duolog.config import (
    DEFAULT_DATETIME_FORMAT,
    DEFAULT_LEVEL,
    DateTimeFormatError,
    LogConfig,
    get_log_config,
    reset_log_config,
)
from duolog.levels import LogLevel
from duolog.logger import Logger, get_logger, get_logger_for


def set_log_file(path: Any) -> None:
    """Set the default config's log file (see ``LogConfig.set_log_file``)."""
    get_log_config().set_log_file(path)


def clear_log_file() -> None:
    """Disable file output on the default config."""
    get_log_config().clear_log_file()


def set_log_level(level: Any) -> None:
    """Set the default config's minimum level (default INFO)."""
    get_log_config().set_log_level(level)


def set_datetime_format(fmt: str) -> None:
    """Set the default config's timestamp format (see ``LogConfig.set_datetime_format``)."""
    get_log_config().set_datetime_format(fmt)


def get_level_color(level: Any) -> Color:
    """Prefix color the default config uses for a level (fallback color if unmapped)."""
    return get_log_config().get_color(level)


def set_level_color(level: Any, color: Any) -> None:
    """Set the default config's prefix color for a level, or "default" for the fallback."""
    get_log_config().set_color(level, color)


__all__ = [
    "DEFAULT_DATETIME_FORMAT",
    "DEFAULT_LEVEL",
    "DateTimeFormatError",
    "LogConfig",
    "LogLevel",
    "Logger",
    "clear_log_file",
    "get_level_color",
    "get_log_config",
    "get_logger",
    "get_logger_for",
    "reset_log_config",
    "set_datetime_format",
    "set_level_color",
    "set_log_file",
    "set_log_level",
]
