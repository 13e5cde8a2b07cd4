"""
Tests for rendering command output onto the terminal.
"""

import pytest
from termshell.core.constants import ForegroundColor
from termshell.core.services.terminal_writer import TerminalWriter, format_json

from tests.conftest import RecordingTerminal


@pytest.fixture
def writer(terminal: RecordingTerminal) -> TerminalWriter:
    return TerminalWriter(terminal)


def _lines(terminal: RecordingTerminal) -> list[str]:
    return terminal.plain_text.split("\r\n")


def test_table_columns_are_padded(writer: TerminalWriter, terminal: RecordingTerminal) -> None:
    writer.write_table(["name", "size"], [["a.txt", 10], ["b", None]])

    assert _lines(terminal)[:4] == [
        "name  | size",
        "------------",
        "a.txt | 10  ",
        "b     |     ",
    ]


def test_objects_as_table(writer: TerminalWriter, terminal: RecordingTerminal) -> None:
    writer.write_objects_as_table([{"id": 1, "label": "one"}, {"id": 2}])

    assert _lines(terminal)[:4] == ["id | label", "----------", "1  | one  ", "2  |      "]


def test_empty_objects_table(writer: TerminalWriter, terminal: RecordingTerminal) -> None:
    writer.write_objects_as_table([])
    assert "No objects to display" in terminal.plain_text


def test_lists(writer: TerminalWriter, terminal: RecordingTerminal) -> None:
    writer.write_list(["x", "y"], ordered=True)
    writer.write_list(["z"])
    writer.write_list(["w"], prefix="-")

    assert _lines(terminal)[:4] == ["  1. x", "  2. y", "  • z", "  - w"]


def test_key_value_alignment(writer: TerminalWriter, terminal: RecordingTerminal) -> None:
    writer.write_key_value({"a": 1, "long": 2})
    writer.write_key_value([("k", "v")], separator=" = ")

    assert _lines(terminal)[:3] == ["a   : 1", "long: 2", "k = v"]


def test_json_uses_terminal_line_endings(
    writer: TerminalWriter, terminal: RecordingTerminal
) -> None:
    writer.write_json({"a": 1})

    assert terminal.text == '{\r\n  "a": 1\r\n}\r\n'
    assert format_json([1]) == "[\r\n  1\r\n]"


def test_diagnostics_have_icons_and_colour(
    writer: TerminalWriter, terminal: RecordingTerminal
) -> None:
    writer.write_error("broken")

    assert terminal.text == f"{ForegroundColor.RED.value}✘ broken\x1b[0m\r\n"


def test_divider_defaults_to_terminal_width() -> None:
    narrow = RecordingTerminal(cols=12)
    writer = TerminalWriter(narrow)

    writer.write_divider()
    writer.write_divider(3, "=")

    assert narrow.text == "-" * 12 + "\r\n===\r\n"
