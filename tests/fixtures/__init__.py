"""
Fixtures package for logger testing.

Provides helpers for parsing emitted log lines.
"""

from fixtures.log_lines import LINE_PATTERN, line_prefix, parse_line

__all__ = [
    "LINE_PATTERN",
    "line_prefix",
    "parse_line",
]
