"""
Pytest configuration and fixtures.

Sets up import paths for the test suite and provides isolated
configurations that print to in-memory rich consoles.
"""

import io
import sys
from pathlib import Path

import pytest

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Add tests directory to path for fixtures
tests_dir = Path(__file__).parent
if str(tests_dir) not in sys.path:
    sys.path.insert(0, str(tests_dir))

from rich.console import Console  # noqa: E402

from duolog.config import LogConfig, reset_log_config  # noqa: E402


@pytest.fixture(autouse=True)
def _reset_default_config():
    """Every test starts and ends with a fresh process-wide config."""
    reset_log_config()
    yield
    reset_log_config()


@pytest.fixture
def console_buffer() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def plain_console(console_buffer) -> Console:
    """Console without color support, so output is plain text."""
    return Console(file=console_buffer, color_system=None, width=200)


@pytest.fixture
def log_config(plain_console) -> LogConfig:
    """Isolated config with default settings writing to plain_console."""
    return LogConfig(console=plain_console)


@pytest.fixture
def console_lines(console_buffer):
    """Callable returning the lines printed so far."""

    def _lines():
        return console_buffer.getvalue().splitlines()

    return _lines
