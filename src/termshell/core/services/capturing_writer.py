"""
Writer decorator that records stdout-equivalent output for pipelines.

``write``, ``writeln``, ``write_json`` and ``write_objects_as_table`` are
captured and passed through. ``write_table`` and the diagnostic channel
(``write_error``/``write_warning``/``write_info``/``write_success``) are
passed through only.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from typing import Any

from termshell.core.constants import BackgroundColor, ForegroundColor
from termshell.core.interfaces.terminal_writer_interface import ITerminalWriter

ANSI_PATTERN = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(text: str) -> str:
    return ANSI_PATTERN.sub("", text)


class CapturingTerminalWriter(ITerminalWriter):
    """Wraps a writer and keeps what a command printed to stdout."""

    def __init__(self, inner: ITerminalWriter) -> None:
        self.inner = inner
        self._lines: list[str] = []
        self._json_values: list[Any] = []
        self._table_objects: list[list[Any]] = []

    def write(self, text: str) -> None:
        self._lines.append(strip_ansi(text))
        self.inner.write(text)

    def writeln(self, text: str | None = None) -> None:
        if text:
            self._lines.append(strip_ansi(text))
        self.inner.writeln(text)

    def write_json(self, value: Any) -> None:
        self._json_values.append(value)
        self.inner.write_json(value)

    def write_objects_as_table(self, objects: Sequence[Mapping[str, Any]]) -> None:
        self._table_objects.append(list(objects))
        self.inner.write_objects_as_table(objects)

    def write_table(self, headers: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
        # Rendered tables are not captured; commands call process.output() instead
        self.inner.write_table(headers, rows)

    def write_success(self, message: str) -> None:
        self.inner.write_success(message)

    def write_info(self, message: str) -> None:
        self.inner.write_info(message)

    def write_warning(self, message: str) -> None:
        self.inner.write_warning(message)

    def write_error(self, message: str) -> None:
        self.inner.write_error(message)

    def wrap_in_color(self, text: str, color: ForegroundColor) -> str:
        return self.inner.wrap_in_color(text, color)

    def wrap_in_background_color(self, text: str, color: BackgroundColor) -> str:
        return self.inner.wrap_in_background_color(text, color)

    def write_divider(self, length: int | None = None, char: str = "-") -> None:
        self.inner.write_divider(length, char)

    def write_list(self, items: Sequence[str], ordered: bool = False, prefix: str = "") -> None:
        self.inner.write_list(items, ordered, prefix)

    def write_key_value(
        self,
        entries: Mapping[str, Any] | Sequence[tuple[str, Any]],
        separator: str = ": ",
    ) -> None:
        self.inner.write_key_value(entries, separator)

    def has_output(self) -> bool:
        return bool(self._lines or self._json_values or self._table_objects)

    def get_captured_data(self) -> Any | None:
        """
        Return the captured output in its most structured form.

        JSON values win over table objects, which win over text. Several
        JSON writes yield a list of every value; several tables are
        flattened into one list of objects. Text is joined with ``\\n``,
        ``\\r\\n`` normalised, and trimmed; ``None`` when nothing was captured.
        """
        if self._json_values:
            if len(self._json_values) == 1:
                return self._json_values[0]
            return list(self._json_values)

        if self._table_objects:
            if len(self._table_objects) == 1:
                return self._table_objects[0]
            return [obj for table in self._table_objects for obj in table]

        if self._lines:
            text = "\n".join(self._lines).replace("\r\n", "\n").strip()
            return text or None

        return None
