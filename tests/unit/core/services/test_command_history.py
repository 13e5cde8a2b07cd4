"""
Tests for command history recording and JSON persistence.
"""

import json
from pathlib import Path

from termshell.core.services.command_history import CommandHistory


def test_blank_and_repeated_commands_are_skipped() -> None:
    history = CommandHistory()

    for command in ["ls", "ls", "  ", "pwd", "ls"]:
        history.add_command(command)

    assert history.get_history() == ["ls", "pwd", "ls"]
    assert history.last_index == 3
    assert history.get_command(1) == "pwd"
    assert history.get_command(3) is None
    assert history.get_command(-1) is None


def test_oldest_entries_are_dropped() -> None:
    history = CommandHistory(max_entries=2)

    for command in ["a", "b", "c"]:
        history.add_command(command)

    assert history.get_history() == ["b", "c"]


def test_persists_to_json(tmp_path: Path) -> None:
    path = tmp_path / "state" / "history.json"
    history = CommandHistory(path)
    history.add_command("echo one")
    history.add_command("echo two")

    assert json.loads(path.read_text(encoding="utf-8")) == ["echo one", "echo two"]

    reloaded = CommandHistory(path)
    reloaded.load()
    assert reloaded.get_history() == ["echo one", "echo two"]

    reloaded.clear()
    assert json.loads(path.read_text(encoding="utf-8")) == []


def test_load_truncates_to_max_entries(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    path.write_text(json.dumps(["a", "b", "c"]), encoding="utf-8")

    history = CommandHistory(path, max_entries=2)
    history.load()

    assert history.get_history() == ["b", "c"]


def test_unreadable_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    path.write_text("{not json", encoding="utf-8")

    history = CommandHistory(path)
    history.load()

    assert history.get_history() == []


def test_non_list_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"a": 1}), encoding="utf-8")

    history = CommandHistory(path)
    history.load()

    assert history.get_history() == []
