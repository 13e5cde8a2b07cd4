"""
Defines the interface for the terminal I/O collaborator.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable


class ITerminal(ABC):
    """
    Narrow terminal contract consumed by the shell core.

    Implementations render text; the core only generates the escape
    sequences it needs for prompts and never parses terminal output.
    """

    @abstractmethod
    def write(self, text: str) -> None:
        """Write raw text (escape sequences included) to the terminal."""

    def writeln(self, text: str = "") -> None:
        self.write(f"{text}\r\n")

    @property
    @abstractmethod
    def cols(self) -> int:
        """Number of columns."""

    @property
    @abstractmethod
    def rows(self) -> int:
        """Number of rows."""

    def clear(self) -> None:
        self.write("\x1b[2J\x1b[H")

    def on_resize(self, callback: Callable[[int, int], None]) -> None:
        """Subscribe to ``(cols, rows)`` resize notifications."""
