"""
Writer rendering command output onto the terminal collaborator.
"""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence
from typing import Any

from termshell.core.constants import RESET, BackgroundColor, ForegroundColor
from termshell.core.interfaces.terminal_interface import ITerminal
from termshell.core.interfaces.terminal_writer_interface import ITerminalWriter

SUCCESS_ICON = "✔"
INFO_ICON = "ℹ"
WARNING_ICON = "⚠"
ERROR_ICON = "✘"
BULLET = "•"


def format_json(value: Any) -> str:
    """Pretty-print ``value`` as JSON with terminal line endings."""
    return json.dumps(value, indent=2, default=str).replace("\n", "\r\n")


class TerminalWriter(ITerminalWriter):
    """Default writer backed by an ``ITerminal``."""

    def __init__(self, terminal: ITerminal) -> None:
        self.terminal = terminal

    def write(self, text: str) -> None:
        self.terminal.write(text)

    def writeln(self, text: str | None = None) -> None:
        self.terminal.writeln(text or "")

    def write_json(self, value: Any) -> None:
        self.terminal.writeln(format_json(value))

    def write_objects_as_table(self, objects: Sequence[Mapping[str, Any]]) -> None:
        if not objects:
            self.write_info("No objects to display")
            return

        headers = list(objects[0].keys())
        rows = [[obj.get(header) for header in headers] for obj in objects]
        self.write_table(headers, rows)

    def write_table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
        cells = [["" if cell is None else str(cell) for cell in row] for row in rows]
        widths = [
            max([len(header)] + [len(row[i]) for row in cells if i < len(row)])
            for i, header in enumerate(headers)
        ]

        header_line = " | ".join(
            self.wrap_in_color(header.ljust(widths[i]), ForegroundColor.YELLOW)
            for i, header in enumerate(headers)
        )
        self.write(header_line + "\r\n")
        self.write("-" * (sum(widths) + 3 * (len(widths) - 1)) + "\r\n")
        for row in cells:
            self.write(
                " | ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)) + "\r\n"
            )

    def write_success(self, message: str) -> None:
        self._write_log(message, ForegroundColor.GREEN, SUCCESS_ICON)

    def write_info(self, message: str) -> None:
        self._write_log(message, ForegroundColor.CYAN, INFO_ICON)

    def write_warning(self, message: str) -> None:
        self._write_log(message, ForegroundColor.YELLOW, WARNING_ICON)

    def write_error(self, message: str) -> None:
        self._write_log(message, ForegroundColor.RED, ERROR_ICON)

    def _write_log(self, message: str, color: ForegroundColor, icon: str) -> None:
        self.terminal.writeln(self.wrap_in_color(f"{icon} {message}", color))

    def wrap_in_color(self, text: str, color: ForegroundColor) -> str:
        return f"{color.value}{text}{RESET}"

    def wrap_in_background_color(self, text: str, color: BackgroundColor) -> str:
        return f"{color.value}{text}{RESET}"

    def write_divider(self, length: int | None = None, char: str = "-") -> None:
        self.terminal.writeln(char * (length or self.terminal.cols))

    def write_list(self, items: Sequence[str], ordered: bool = False, prefix: str = "") -> None:
        for index, item in enumerate(items, start=1):
            marker = prefix or (f"{index}." if ordered else BULLET)
            self.terminal.writeln(f"  {marker} {item}")

    def write_key_value(
        self,
        entries: Mapping[str, Any] | Sequence[tuple[str, Any]],
        separator: str = ": ",
    ) -> None:
        pairs = list(entries.items()) if isinstance(entries, Mapping) else list(entries)
        if not pairs:
            return
        width = max(len(str(key)) for key, _ in pairs)
        for key, value in pairs:
            label = self.wrap_in_color(str(key).ljust(width), ForegroundColor.CYAN)
            self.terminal.writeln(f"{label}{separator}{value}")
