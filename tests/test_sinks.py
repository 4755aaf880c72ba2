"""Tests for the console and file sinks."""

import io

import pytest
from rich.console import Console
from rich.style import Style

from duolog.sinks import ConsoleSink, FileSink, append_lines, strip_escapes


class TestConsoleSink:
    """ConsoleSink output."""

    def test_strip_escapes(self):
        assert strip_escapes("a\x1b[31mb\x1b") == "a[31mb"
        assert strip_escapes("plain") == "plain"

    def test_write_lines(self, plain_console, console_lines):
        ConsoleSink(plain_console).write_lines("[p]", Style(color="red"), ["one", "two"])
        assert console_lines() == ["[p] one", "[p] two"]

    def test_markup_not_interpreted(self, plain_console, console_lines):
        ConsoleSink(plain_console).write_lines("[p]", Style(), ["[bold]x[/bold] :smile:"])
        assert console_lines() == ["[p] [bold]x[/bold] :smile:"]

    def test_only_prefix_is_styled(self):
        buffer = io.StringIO()
        console = Console(file=buffer, force_terminal=True, color_system="truecolor")
        ConsoleSink(console).write_lines("[p]", Style(color="#ff0000"), ["text"])
        assert buffer.getvalue() == "\x1b[38;2;255;0;0m[p]\x1b[0m text\n"

    def test_report_is_single_line(self, plain_console, console_lines):
        ConsoleSink(plain_console).report("first\nsecond")
        assert console_lines() == ["first second"]

    def test_tab_and_form_feed_written_as_is(self, plain_console, console_buffer):
        ConsoleSink(plain_console).write_lines("[p]", Style(), ["a\tb\x0cc\x08d"])
        assert console_buffer.getvalue() == "[p] a\tb\x0cc\x08d\n"

    def test_unencodable_characters_replaced(self):
        raw = io.BytesIO()
        console = Console(file=io.TextIOWrapper(raw, encoding="ascii"), color_system=None)
        sink = ConsoleSink(console)

        sink.write_lines("[p]", Style(), ["x \ud800 é"])
        sink.report("bad \udfff")

        console.file.flush()
        assert raw.getvalue() == b"[p] x ? ?\nbad ?\n"


class TestFileSink:
    """FileSink appends on a background worker."""

    @pytest.fixture
    def sink(self):
        sink = FileSink()
        yield sink
        sink.shutdown()

    def test_append_lines_appends(self, tmp_path):
        path = tmp_path / "out.log"
        append_lines(str(path), ["a"])
        append_lines(str(path), ["b", "c"])
        assert path.read_text(encoding="utf-8") == "a\nb\nc\n"

    def test_append_lines_replaces_unencodable(self, tmp_path):
        path = tmp_path / "app.log"
        append_lines(str(path), ["bad \ud800 text"])
        assert path.read_text(encoding="utf-8") == "bad ? text\n"

    def test_begin_append_completes(self, sink, tmp_path):
        path = tmp_path / "out.log"
        future = sink.begin_append(str(path), ["x", "y"])
        assert future.result(timeout=5) is None
        assert path.read_text(encoding="utf-8") == "x\ny\n"

    def test_begin_append_error_on_result(self, sink, tmp_path):
        future = sink.begin_append(str(tmp_path / "missing" / "out.log"), ["x"])
        with pytest.raises(OSError):
            future.result(timeout=5)

    def test_restart_after_shutdown(self, sink, tmp_path):
        path = tmp_path / "out.log"
        sink.begin_append(str(path), ["1"]).result(timeout=5)
        sink.shutdown()
        sink.begin_append(str(path), ["2"]).result(timeout=5)
        assert path.read_text(encoding="utf-8") == "1\n2\n"
