"""Severity levels for duolog loggers.

Levels are ordered from least to most severe:
    DEBUG < INFO < WARNING < ERROR < IMPORTANT < CRITICAL

A message is emitted when its level is at least as severe as the
configured minimum level.
"""

import logging
from enum import IntEnum
from typing import Any


# stdlib level number used for IMPORTANT records coming through the bridge
IMPORTANT_LEVELNO = 45
logging.addLevelName(IMPORTANT_LEVELNO, "IMPORTANT")


class LogLevel(IntEnum):
    """Log level that a message is written with."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    IMPORTANT = 4
    CRITICAL = 5

    @property
    def label(self) -> str:
        """Display name used in the line prefix (e.g. ``Info``)."""
        return self.name.capitalize()

    def __str__(self) -> str:
        return self.label

    @classmethod
    def parse(cls, value: Any) -> "LogLevel":
        """
        Resolve a level from a member, an int value or a name.

        Names are case-insensitive and a few common aliases are accepted
        (``information``, ``warn``, ``fatal``).

        Args:
            value: LogLevel, int or str to resolve.

        Returns:
            The matching LogLevel.

        Raises:
            ValueError: If the value does not name a level.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ValueError(f"Invalid log level: {value!r}")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ValueError(f"Invalid log level: {value!r}") from None
        if isinstance(value, str):
            key = value.strip().lower()
            key = _ALIASES.get(key, key)
            for member in cls:
                if member.name.lower() == key:
                    return member
        raise ValueError(f"Invalid log level: {value!r}")

    @classmethod
    def from_stdlib(cls, levelno: int) -> "LogLevel":
        """
        Map a stdlib ``logging`` level number to a LogLevel.

        Args:
            levelno: Level number of a ``logging.LogRecord``.

        Returns:
            The closest LogLevel not more severe than the record.
        """
        if levelno < logging.INFO:
            return cls.DEBUG
        if levelno < logging.WARNING:
            return cls.INFO
        if levelno < logging.ERROR:
            return cls.WARNING
        if levelno == logging.ERROR:
            return cls.ERROR
        if levelno < logging.CRITICAL:
            return cls.IMPORTANT
        return cls.CRITICAL


_ALIASES = {
    "information": "info",
    "warn": "warning",
    "fatal": "critical",
}
