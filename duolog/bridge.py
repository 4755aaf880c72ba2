"""Forward stdlib ``logging`` records to duolog sinks.

Usage:
    import logging
    from duolog.bridge import install

    install()  # root logger
    logging.getLogger("app.db").warning("Slow query")
    # -> [..] [app.db] [Warning] Slow query
"""

import logging
from typing import Optional

from duolog.config import LogConfig
from duolog.diagnostics import get_internal_logger
from duolog.levels import LogLevel
from duolog.logger import Logger

logger = get_internal_logger(__name__)


class DuologHandler(logging.Handler):
    """
    logging.Handler that writes records through a duolog Logger.

    The record's logger name becomes the duolog logger name and its level
    is mapped with ``LogLevel.from_stdlib``. duolog's own minimum level
    still applies on top of the handler's level.
    """

    def __init__(self, config: Optional[LogConfig] = None, level: int = logging.NOTSET) -> None:
        """
        Initialize the handler.

        Args:
            config: Optional config. Defaults to the process-wide config.
            level: Handler level threshold.
        """
        super().__init__(level)
        self.config = config
        self._loggers: dict[str, Logger] = {}

    def _logger_for(self, name: str) -> Logger:
        if name not in self._loggers:
            self._loggers[name] = Logger(name or "root", self.config)
        return self._loggers[name]

    def emit(self, record: logging.LogRecord) -> None:
        try:
            exc = record.exc_info[1] if record.exc_info else None
            self._logger_for(record.name).write(
                record.getMessage(),
                LogLevel.from_stdlib(record.levelno),
                exc,
            )
        except Exception:
            self.handleError(record)


def install(
    target: Optional[logging.Logger] = None,
    config: Optional[LogConfig] = None,
) -> DuologHandler:
    """
    Attach a DuologHandler to a stdlib logger.

    Installing twice on the same logger returns the existing handler.

    Args:
        target: Logger to attach to. Defaults to the root logger.
        config: Optional config for the handler.

    Returns:
        The attached handler.
    """
    target = target or logging.getLogger()
    for handler in target.handlers:
        if isinstance(handler, DuologHandler):
            return handler

    handler = DuologHandler(config)
    target.addHandler(handler)
    logger.debug(f"DuologHandler installed on logger '{target.name}'")
    return handler


def uninstall(target: Optional[logging.Logger] = None) -> int:
    """
    Remove every DuologHandler from a stdlib logger.

    Returns:
        Number of handlers removed.
    """
    target = target or logging.getLogger()
    removed = [h for h in target.handlers if isinstance(h, DuologHandler)]
    for handler in removed:
        target.removeHandler(handler)
    return len(removed)
