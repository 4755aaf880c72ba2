"""Named loggers writing to the console and an optional log file.

Every line a logger emits has the form:

    [<timestamp>] [<name>] [<Level>] <text>

A write is serialized by the config's write lock: the file append is
started, the console lines are printed, and the call waits for the file
append before releasing the lock. A slow file system therefore stalls
every logger sharing that config; there is no timeout.

Usage:
    logger = get_logger("Net")
    logger.info("Connected")
    logger.error("Handshake failed", exc)
"""

import re
import sys
import traceback
from concurrent.futures import Future
from datetime import datetime
from typing import Any, List, Optional

from duolog.colors import style_for
from duolog.config import ConfigSnapshot, LogConfig, get_log_config
from duolog.levels import LogLevel
from duolog.sinks import ConsoleSink, FileSink

# Substituted for a blank message when no exception is attached
NULL_MESSAGE = "null"

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")

_file_sink = FileSink()


def sanitize_name(name: Any) -> str:
    """
    Remove control characters (0x00-0x1F, 0x7F) from a logger name.

    Args:
        name: Requested logger name.

    Returns:
        The name without control characters.

    Raises:
        ValueError: If the name is not a string or nothing but whitespace
            remains after sanitization.
    """
    if not isinstance(name, str):
        raise ValueError(f"Logger name must be a string, got {type(name).__name__}")
    cleaned = _CONTROL_CHARS.sub("", name)
    if not cleaned.strip():
        raise ValueError("Logger name must not be empty")
    return cleaned


def type_name(value: Any) -> str:
    """Fully-qualified type name of a value (or of the class itself)."""
    cls = value if isinstance(value, type) else type(value)
    return f"{cls.__module__}.{cls.__qualname__}"


def format_exception(exc: BaseException) -> str:
    """Render an exception with its traceback and chained causes."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def _split_lines(text: str) -> List[str]:
    return [line.rstrip("\r") for line in text.split("\n")]


def build_lines(message: Any, exc: Optional[BaseException] = None) -> List[str]:
    """
    Turn a message and optional exception into content lines.

    A blank message without an exception becomes ``"null"``. With an
    exception attached, a blank string still contributes one empty line
    while None contributes nothing.

    Args:
        message: Message text or any object (rendered with ``str()``).
        exc: Optional exception appended after the message lines.

    Returns:
        Content lines, without prefixes.
    """
    if message is not None and not isinstance(message, str):
        message = str(message)

    lines: List[str] = []
    if exc is None and (message is None or not message.strip()):
        lines.append(NULL_MESSAGE)
    elif message is not None:
        lines.extend(_split_lines(message.strip()))

    if exc is not None:
        lines.extend(_split_lines(format_exception(exc).rstrip("\n")))
    return lines


class Logger:
    """
    A named logger.

    The name is fixed at construction. Level, file, format and colors come
    from the LogConfig the logger writes through: the one passed in, or
    the process-wide default looked up on every write.
    """

    def __init__(self, name: str, config: Optional[LogConfig] = None) -> None:
        """
        Initialize the logger.

        Args:
            name: Display name. Control characters are removed.
            config: Optional config. Defaults to the process-wide config.

        Raises:
            ValueError: If the name is empty after sanitization.
        """
        self._name = sanitize_name(name)
        self._config = config

    @property
    def name(self) -> str:
        return self._name

    @property
    def config(self) -> LogConfig:
        return self._config if self._config is not None else get_log_config()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self._name!r})"

    # -------------------------------------------------------------------------
    # Write path
    # -------------------------------------------------------------------------

    def write(
        self,
        message: Any,
        level: Any = LogLevel.INFO,
        exc: Optional[BaseException] = None,
    ) -> bool:
        """
        Write a message at the given level.

        File I/O failures are reported on the console and never raised.

        Args:
            message: Message text or any object (rendered with ``str()``).
            level: Level of the message.
            exc: Optional exception whose traceback is appended.

        Returns:
            True if the message passed the level filter and was written.
        """
        level = LogLevel.parse(level)
        config = self.config
        settings = config.snapshot()
        if level < settings.level:
            return False

        lines = build_lines(message, exc)
        prefix = self._prefix(settings, level)
        console = ConsoleSink(settings.console)

        with config.write_lock:
            pending: Optional[Future] = None
            try:
                if settings.log_file:
                    pending = _file_sink.begin_append(
                        settings.log_file,
                        [f"{prefix} {line}" for line in lines],
                    )
                console.write_lines(prefix, style_for(settings.color_for(level)), lines)
            finally:
                if pending is not None:
                    self._finish_file_write(pending, console)
        return True

    def _prefix(self, settings: ConfigSnapshot, level: LogLevel) -> str:
        timestamp = datetime.now().astimezone().strftime(settings.datetime_format)
        return f"[{timestamp}] [{self._name}] [{level.label}]"

    @staticmethod
    def _finish_file_write(pending: Future, console: ConsoleSink) -> None:
        try:
            pending.result()
        except (OSError, ValueError) as e:
            console.report(f"Failed to write to log file: {e}")

    # -------------------------------------------------------------------------
    # Convenience methods
    # -------------------------------------------------------------------------

    def debug(self, message: Any, exc: Optional[BaseException] = None) -> bool:
        """Write a message at DEBUG level."""
        return self.write(message, LogLevel.DEBUG, exc)

    def info(self, message: Any, exc: Optional[BaseException] = None) -> bool:
        """Write a message at INFO level."""
        return self.write(message, LogLevel.INFO, exc)

    def warn(self, message: Any, exc: Optional[BaseException] = None) -> bool:
        """Write a message at WARNING level."""
        return self.write(message, LogLevel.WARNING, exc)

    warning = warn

    def error(self, message: Any, exc: Optional[BaseException] = None) -> bool:
        """Write a message at ERROR level."""
        return self.write(message, LogLevel.ERROR, exc)

    def important(self, message: Any, exc: Optional[BaseException] = None) -> bool:
        """Write a message at IMPORTANT level."""
        return self.write(message, LogLevel.IMPORTANT, exc)

    def critical(self, message: Any, exc: Optional[BaseException] = None) -> bool:
        """Write a message at CRITICAL level."""
        return self.write(message, LogLevel.CRITICAL, exc)

    def exception(self, message: Any, exc: Optional[BaseException] = None) -> bool:
        """
        Write a message at ERROR level with the exception being handled.

        Args:
            message: Message text or any object.
            exc: Exception to attach. Defaults to the one currently handled.
        """
        if exc is None:
            exc = sys.exc_info()[1]
        return self.write(message, LogLevel.ERROR, exc)


def get_logger(name: str, config: Optional[LogConfig] = None) -> Logger:
    """
    Get a new logger with the specified name.

    Args:
        name: Display name of the logger.
        config: Optional config. Defaults to the process-wide config.

    Returns:
        New Logger instance.
    """
    return Logger(name, config)


def get_logger_for(value: Any, config: Optional[LogConfig] = None) -> Logger:
    """
    Get a new logger named after a value's fully-qualified type.

    Args:
        value: An instance or a class.
        config: Optional config. Defaults to the process-wide config.

    Returns:
        New Logger named ``<module>.<QualifiedName>``.
    """
    return Logger(type_name(value), config)
