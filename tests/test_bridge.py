"""Tests for the stdlib logging bridge."""

import logging

import pytest

from duolog.bridge import DuologHandler, install, uninstall
from duolog.levels import IMPORTANT_LEVELNO, LogLevel

from fixtures.log_lines import parse_line


@pytest.fixture
def std_logger():
    """Isolated stdlib logger that does not propagate to root."""
    logger = logging.getLogger("tests.bridge")
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    yield logger
    uninstall(logger)


class TestDuologHandler:
    """Records are written through duolog loggers."""

    def test_record_forwarded(self, std_logger, log_config, console_lines):
        install(std_logger, log_config)

        std_logger.warning("Slow query: %d ms", 250)

        match = parse_line(console_lines()[0])
        assert match["name"] == "tests.bridge"
        assert match["level"] == "Warning"
        assert match["text"] == "Slow query: 250 ms"

    def test_duolog_level_still_filters(self, std_logger, log_config, console_lines):
        install(std_logger, log_config)

        std_logger.debug("hidden")
        assert console_lines() == []

        log_config.set_log_level(LogLevel.DEBUG)
        std_logger.debug("shown")
        assert parse_line(console_lines()[0])["level"] == "Debug"

    def test_important_level(self, std_logger, log_config, console_lines):
        install(std_logger, log_config)
        std_logger.log(IMPORTANT_LEVELNO, "heads up")
        assert parse_line(console_lines()[0])["level"] == "Important"

    def test_exception_attached(self, std_logger, log_config, console_lines):
        install(std_logger, log_config)

        try:
            raise KeyError("user")
        except KeyError:
            std_logger.exception("Lookup failed")

        lines = console_lines()
        assert parse_line(lines[0])["text"] == "Lookup failed"
        assert parse_line(lines[-1])["text"] == "KeyError: 'user'"
        assert all(parse_line(line)["level"] == "Error" for line in lines)

    def test_handler_error_routed_to_handle_error(self, log_config, monkeypatch):
        handler = DuologHandler(log_config)
        errors = []
        monkeypatch.setattr(handler, "handleError", lambda record: errors.append(record))
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "%d", ("nan",), None)

        handler.emit(record)

        assert errors == [record]


class TestInstall:
    """install / uninstall."""

    def test_install_is_idempotent(self, std_logger, log_config):
        first = install(std_logger, log_config)
        second = install(std_logger, log_config)
        assert first is second
        assert sum(isinstance(h, DuologHandler) for h in std_logger.handlers) == 1

    def test_uninstall_removes(self, std_logger, log_config):
        install(std_logger, log_config)
        assert uninstall(std_logger) == 1
        assert not any(isinstance(h, DuologHandler) for h in std_logger.handlers)

    def test_internal_diagnostics_do_not_propagate(self):
        assert logging.getLogger("duolog").propagate is False
