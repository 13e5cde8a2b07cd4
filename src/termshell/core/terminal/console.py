"""
Terminal collaborator backed by the process's own stdin/stdout (POSIX).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import re
import shutil
import signal
import sys
import termios
import tty
from collections.abc import AsyncIterator, Callable, Iterator
from typing import TextIO

from termshell.core.constants import DEFAULT_COLUMNS
from termshell.core.interfaces.terminal_interface import ITerminal

logger = logging.getLogger(__name__)

# CSI sequences, SS3 sequences, a lone escape, a single control character,
# or a run of printable text.
_KEY_PATTERN = re.compile(
    r"\x1b\[[0-9;?]*[ -/]*[@-~]|\x1bO.|\x1b|[\x00-\x1f\x7f]|[^\x00-\x1f\x7f]+",
    re.DOTALL,
)


def split_keys(data: str) -> list[str]:
    """
    Split a chunk read from the terminal into individual keystrokes.

    Escape sequences and control characters come out one per item; runs of
    printable text (a paste, for instance) stay together.
    """
    return _KEY_PATTERN.findall(data)


class ConsoleTerminal(ITerminal):
    """Writes to stdout and reads raw keystrokes from stdin."""

    def __init__(
        self,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._resize_callbacks: list[Callable[[int, int], None]] = []

    def write(self, text: str) -> None:
        self._stdout.write(text)
        self._stdout.flush()

    @property
    def cols(self) -> int:
        return shutil.get_terminal_size((DEFAULT_COLUMNS, 24)).columns

    @property
    def rows(self) -> int:
        return shutil.get_terminal_size((DEFAULT_COLUMNS, 24)).lines

    def on_resize(self, callback: Callable[[int, int], None]) -> None:
        if not self._resize_callbacks:
            with contextlib.suppress(ValueError, AttributeError):
                signal.signal(signal.SIGWINCH, self._handle_resize)
        self._resize_callbacks.append(callback)

    def _handle_resize(self, signum: int, frame: object) -> None:
        cols, rows = self.cols, self.rows
        for callback in list(self._resize_callbacks):
            try:
                callback(cols, rows)
            except Exception as e:
                logger.warning("Resize listener failed: %s", e, exc_info=True)

    @property
    def is_interactive(self) -> bool:
        return self._stdin.isatty()

    @contextlib.contextmanager
    def raw_mode(self) -> Iterator[None]:
        """Put stdin in raw mode for the duration of the block."""
        fd = self._stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            yield
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)

    async def read_keys(self) -> AsyncIterator[str]:
        """Yield keystrokes from stdin until it reaches end of file."""
        loop = asyncio.get_running_loop()
        queue: asyncio.Queue[str | None] = asyncio.Queue()
        fd = self._stdin.fileno()

        def _on_readable() -> None:
            try:
                chunk = os.read(fd, 1024)
            except OSError as e:
                logger.warning("Reading from the terminal failed: %s", e)
                chunk = b""
            if not chunk:
                loop.remove_reader(fd)
                queue.put_nowait(None)
                return
            for key in split_keys(chunk.decode("utf-8", errors="replace")):
                queue.put_nowait(key)

        loop.add_reader(fd, _on_readable)
        try:
            while True:
                key = await queue.get()
                if key is None:
                    return
                yield key
        finally:
            loop.remove_reader(fd)
