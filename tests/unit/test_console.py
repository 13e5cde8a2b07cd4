"""
Tests for the stdin/stdout terminal and keystroke splitting.
"""

import io

import pytest
from termshell.core.constants import (
    KEY_ARROW_LEFT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_CTRL_C,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_TAB,
)
from termshell.core.terminal.console import ConsoleTerminal, split_keys


@pytest.mark.parametrize(
    ("data", "keys"),
    [
        ("ls", ["ls"]),
        (f"ls{KEY_ENTER}", ["ls", KEY_ENTER]),
        (f"{KEY_ARROW_UP}{KEY_ARROW_LEFT}x", [KEY_ARROW_UP, KEY_ARROW_LEFT, "x"]),
        (f"ab{KEY_BACKSPACE}{KEY_TAB}", ["ab", KEY_BACKSPACE, KEY_TAB]),
        (KEY_ESCAPE, [KEY_ESCAPE]),
        (f"{KEY_CTRL_C}", [KEY_CTRL_C]),
        ("\x1bOA", ["\x1bOA"]),
        ("\x1b[3~", ["\x1b[3~"]),
        ("", []),
    ],
)
def test_split_keys(data: str, keys: list[str]) -> None:
    assert split_keys(data) == keys


def test_write_goes_to_stdout() -> None:
    stdout = io.StringIO()
    terminal = ConsoleTerminal(stdin=io.StringIO(), stdout=stdout)

    terminal.write("a")
    terminal.writeln("b")

    assert stdout.getvalue() == "ab\r\n"


def test_string_stdin_is_not_interactive() -> None:
    terminal = ConsoleTerminal(stdin=io.StringIO(), stdout=io.StringIO())

    assert terminal.is_interactive is False
    assert terminal.cols > 0
    assert terminal.rows > 0
