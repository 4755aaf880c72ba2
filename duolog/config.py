"""Shared logger configuration.

LogConfig holds every setting the write path reads:
- minimum level
- log file target (optional)
- timestamp format
- per-level prefix colors
- the console the console sink prints to
- the write lock that serializes writes

Settings are guarded by an internal lock. A write takes one snapshot of
them, so a reconfiguration racing with a write never mixes old and new
values within that write.

Usage:
    config = LogConfig()
    config.set_log_level(LogLevel.DEBUG)
    config.set_log_file("logs/app.log")
    logger = Logger("Net", config=config)
"""

import os
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from rich.color import Color
from rich.console import Console

from duolog.colors import DEFAULT_FALLBACK_COLOR, DEFAULT_LEVEL_COLORS, parse_color
from duolog.diagnostics import get_internal_logger
from duolog.levels import LogLevel

logger = get_internal_logger(__name__)


DEFAULT_LEVEL = LogLevel.INFO
DEFAULT_DATETIME_FORMAT = "%d/%m/%Y %H:%M:%S%z"

# Key used for the fallback color in color mappings
DEFAULT_COLOR_KEY = "default"


class DateTimeFormatError(ValueError):
    """Raised when a datetime format cannot render a timestamp."""


@dataclass(frozen=True)
class ConfigSnapshot:
    """Settings read together by a single write."""

    level: LogLevel
    log_file: Optional[str]
    datetime_format: str
    colors: Dict[LogLevel, Color] = field(default_factory=dict)
    fallback_color: Color = DEFAULT_FALLBACK_COLOR
    console: Optional[Console] = None

    def color_for(self, level: Any) -> Color:
        """Color mapped to a level, or the fallback color."""
        return self.colors.get(level, self.fallback_color)


def _is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def validate_log_file(path: Any) -> str:
    """
    Check that a log file path is usable as a file sink target.

    The file itself is not created or opened.

    Args:
        path: Candidate path (str or os.PathLike).

    Returns:
        The path as a string, unchanged.

    Raises:
        ValueError: If the path is blank or cannot be made absolute.
    """
    if path is None:
        raise ValueError("Log file path must not be None")
    try:
        path = os.fspath(path)
    except TypeError as e:
        raise ValueError(f"Invalid log file path: {path!r}") from e
    if isinstance(path, bytes):
        path = os.fsdecode(path)
    if _is_blank(path):
        raise ValueError("Log file path must not be empty")
    if "\x00" in path:
        raise ValueError("Invalid log file path: contains NUL character")
    try:
        os.path.abspath(path)
    except (TypeError, ValueError, OSError) as e:
        raise ValueError(f"Invalid log file path: {path!r}") from e
    return path


def validate_datetime_format(fmt: Any) -> str:
    """
    Check a strftime format by rendering the current local time with it.

    Args:
        fmt: Candidate format string.

    Returns:
        The format, unchanged.

    Raises:
        ValueError: If the format is blank or not a string.
        DateTimeFormatError: If the trial render fails.
    """
    if not isinstance(fmt, str) or _is_blank(fmt):
        raise ValueError("Datetime format must be a non-empty string")
    try:
        datetime.now().astimezone().strftime(fmt)
    except (ValueError, UnicodeError) as e:
        raise DateTimeFormatError(f"Invalid datetime format {fmt!r}: {e}") from e
    return fmt


def _color_property(level: LogLevel) -> property:
    def getter(self: "LogConfig") -> Color:
        return self.get_color(level)

    def setter(self: "LogConfig", value: Any) -> None:
        self.set_color(level, value)

    return property(getter, setter, doc=f"Prefix color for {level.label} messages.")


class LogConfig:
    """
    Configuration shared by every logger that writes through it.

    All setters validate their input and raise on invalid values; they
    are meant to be called at startup, not retried.
    """

    def __init__(
        self,
        level: Any = DEFAULT_LEVEL,
        log_file: Optional[str] = None,
        datetime_format: str = DEFAULT_DATETIME_FORMAT,
        colors: Optional[Mapping[Any, Any]] = None,
        console: Optional[Console] = None,
    ) -> None:
        """
        Initialize configuration with the documented defaults.

        Args:
            level: Minimum level to emit. Defaults to INFO.
            log_file: Optional log file path. None disables the file sink.
            datetime_format: strftime format for prefix timestamps.
            colors: Optional overrides keyed by level (or "default").
            console: rich Console for the console sink. Defaults to stdout.
        """
        self._lock = threading.RLock()
        self.write_lock = threading.Lock()
        self._level = LogLevel.parse(level)
        self._log_file = validate_log_file(log_file) if log_file is not None else None
        self._datetime_format = validate_datetime_format(datetime_format)
        self._colors: Dict[LogLevel, Color] = dict(DEFAULT_LEVEL_COLORS)
        self._fallback_color = DEFAULT_FALLBACK_COLOR
        self._console = console or Console(highlight=False)
        if colors:
            self.set_colors(colors)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(level={self.level.label!r}, "
            f"log_file={self.log_file!r}, datetime_format={self.datetime_format!r})"
        )

    # -------------------------------------------------------------------------
    # Level
    # -------------------------------------------------------------------------

    @property
    def level(self) -> LogLevel:
        """Minimum level a message needs to be emitted."""
        with self._lock:
            return self._level

    @level.setter
    def level(self, value: Any) -> None:
        self.set_log_level(value)

    def set_log_level(self, level: Any) -> None:
        """
        Replace the minimum level.

        Args:
            level: LogLevel, int value or level name.

        Raises:
            ValueError: If the level is unknown.
        """
        level = LogLevel.parse(level)
        with self._lock:
            self._level = level
        logger.debug(f"Minimum log level set to {level.label}")

    def is_enabled(self, level: Any) -> bool:
        """Whether a message at ``level`` passes the minimum level filter."""
        return LogLevel.parse(level) >= self.level

    # -------------------------------------------------------------------------
    # Log file
    # -------------------------------------------------------------------------

    @property
    def log_file(self) -> Optional[str]:
        """Target of the file sink, or None when file output is disabled."""
        with self._lock:
            return self._log_file

    def set_log_file(self, path: Any) -> None:
        """
        Replace the log file target.

        The file is not created or checked for writability until the
        first write.

        Args:
            path: Path of the file to append log lines to.

        Raises:
            ValueError: If the path is blank or cannot be made absolute.
        """
        path = validate_log_file(path)
        with self._lock:
            self._log_file = path
        logger.debug(f"Log file set to {path}")

    def clear_log_file(self) -> None:
        """Disable the file sink."""
        with self._lock:
            self._log_file = None
        logger.debug("Log file cleared")

    # -------------------------------------------------------------------------
    # Datetime format
    # -------------------------------------------------------------------------

    @property
    def datetime_format(self) -> str:
        """strftime format used to render prefix timestamps."""
        with self._lock:
            return self._datetime_format

    def set_datetime_format(self, fmt: str) -> None:
        """
        Replace the timestamp format.

        Args:
            fmt: strftime format string.

        Raises:
            ValueError: If the format is blank.
            DateTimeFormatError: If a trial render with the format fails.
        """
        fmt = validate_datetime_format(fmt)
        with self._lock:
            self._datetime_format = fmt
        logger.debug(f"Datetime format set to {fmt!r}")

    # -------------------------------------------------------------------------
    # Colors
    # -------------------------------------------------------------------------

    debug_color = _color_property(LogLevel.DEBUG)
    info_color = _color_property(LogLevel.INFO)
    warning_color = _color_property(LogLevel.WARNING)
    error_color = _color_property(LogLevel.ERROR)
    important_color = _color_property(LogLevel.IMPORTANT)
    critical_color = _color_property(LogLevel.CRITICAL)

    @property
    def default_color(self) -> Color:
        """Fallback prefix color for levels without a mapped color."""
        with self._lock:
            return self._fallback_color

    @default_color.setter
    def default_color(self, value: Any) -> None:
        color = parse_color(value)
        with self._lock:
            self._fallback_color = color

    def get_color(self, level: Any) -> Color:
        """
        Get the prefix color for a level.

        Args:
            level: Level to look up.

        Returns:
            The mapped color, or the fallback color for unmapped levels.
        """
        with self._lock:
            return self._colors.get(level, self._fallback_color)

    def set_color(self, level: Any, color: Any) -> None:
        """
        Set the prefix color for one level.

        Args:
            level: Level (or "default" for the fallback color).
            color: Any value accepted by ``parse_color``.

        Raises:
            ValueError: If the level or the color is invalid.
        """
        if isinstance(level, str) and level.strip().lower() == DEFAULT_COLOR_KEY:
            self.default_color = color
            return
        level = LogLevel.parse(level)
        parsed = parse_color(color)
        with self._lock:
            self._colors[level] = parsed

    def set_colors(self, colors: Mapping[Any, Any]) -> None:
        """Set several colors at once (see ``set_color``)."""
        for level, color in colors.items():
            self.set_color(level, color)

    # -------------------------------------------------------------------------
    # Console
    # -------------------------------------------------------------------------

    @property
    def console(self) -> Console:
        """rich Console the console sink prints to."""
        with self._lock:
            return self._console

    @console.setter
    def console(self, value: Console) -> None:
        with self._lock:
            self._console = value

    # -------------------------------------------------------------------------
    # Snapshot
    # -------------------------------------------------------------------------

    def snapshot(self) -> ConfigSnapshot:
        """Read every write-path setting at once."""
        with self._lock:
            return ConfigSnapshot(
                level=self._level,
                log_file=self._log_file,
                datetime_format=self._datetime_format,
                colors=dict(self._colors),
                fallback_color=self._fallback_color,
                console=self._console,
            )


# Singleton instance for global access
_log_config: Optional[LogConfig] = None
_log_config_guard = threading.Lock()


def get_log_config() -> LogConfig:
    """
    Get the process-wide LogConfig instance.

    Returns:
        Singleton LogConfig with the documented defaults on first use.
    """
    global _log_config
    with _log_config_guard:
        if _log_config is None:
            _log_config = LogConfig()
        return _log_config


def reset_log_config() -> None:
    """Reset the process-wide LogConfig instance (for testing)."""
    global _log_config
    with _log_config_guard:
        _log_config = None
