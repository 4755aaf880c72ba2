"""Output sinks for log lines.

- ConsoleSink: writes lines to a rich Console's stream, prefix in color
- FileSink: appends lines to a file on a background worker thread

Neither sink locks; the caller holds the config's write lock around a
whole write.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Iterable, List, Optional

from rich.console import Console
from rich.style import Style
from rich.text import Text

ESCAPE = "\x1b"


def strip_escapes(line: str) -> str:
    """Remove ANSI escape characters so message content cannot drive the terminal."""
    return line.replace(ESCAPE, "")


class ConsoleSink:
    """
    Writes prefixed lines to a rich Console.

    rich renders only the colored prefix. Content is written to the
    console's stream as is, so tabs and control characters other than
    escape reach the terminal unchanged and match the file sink.
    """

    def __init__(self, console: Console) -> None:
        self.console = console

    def write_lines(self, prefix: str, style: Style, lines: Iterable[str]) -> None:
        """
        Print one console line per content line.

        Args:
            prefix: Plain prefix text, rendered with ``style``.
            style: Style for the prefix (message content is unstyled).
            lines: Content lines. Escape characters are removed and
                characters the stream cannot encode are replaced.
        """
        styled = self._encodable(self._render(Text(prefix, style=style)))
        self._write("".join(f"{styled} {self._encodable(strip_escapes(line))}\n" for line in lines))

    def report(self, message: str) -> None:
        """Print a one-line plain diagnostic."""
        self._write(self._encodable(strip_escapes(message.replace("\n", " "))) + "\n")

    def _render(self, text: Text) -> str:
        with self.console.capture() as capture:
            self.console.print(text, end="", soft_wrap=True, highlight=False, markup=False, emoji=False)
        return capture.get()

    def _encodable(self, text: str) -> str:
        encoding = self.console.encoding
        return text.encode(encoding, "replace").decode(encoding)

    def _write(self, text: str) -> None:
        stream = self.console.file
        stream.write(text)
        stream.flush()


def append_lines(path: str, lines: List[str]) -> None:
    """Append newline-terminated lines to a UTF-8 text file, replacing unencodable characters."""
    with open(path, "a", encoding="utf-8", errors="replace") as f:
        f.writelines(f"{line}\n" for line in lines)


class FileSink:
    """
    Appends lines to log files on a single background worker.

    ``begin_append`` returns at once; callers wait on the returned future
    when they need the append to have finished.
    """

    def __init__(self) -> None:
        self._executor: Optional[ThreadPoolExecutor] = None
        self._guard = threading.Lock()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._guard:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=1,
                    thread_name_prefix="duolog-file",
                )
            return self._executor

    def begin_append(self, path: str, lines: Iterable[str]) -> Future:
        """
        Start appending lines to a file.

        Args:
            path: File to append to. It is created if missing; its parent
                directory is not.
            lines: Lines to write, without trailing newlines.

        Returns:
            Future that completes when the append is done. I/O errors are
            raised from ``Future.result()``.
        """
        lines = list(lines)
        try:
            return self._get_executor().submit(append_lines, path, lines)
        except RuntimeError:
            # Executor refuses new work during interpreter shutdown
            future: Future = Future()
            try:
                append_lines(path, lines)
            except Exception as e:
                future.set_exception(e)
            else:
                future.set_result(None)
            return future

    def shutdown(self, wait: bool = True) -> None:
        """Stop the worker thread. A later append starts a new one."""
        with self._guard:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=wait)
