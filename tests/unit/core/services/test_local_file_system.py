"""
Tests for the local file system service and the alias store.
"""

from pathlib import Path

from termshell.core.services.alias_store import UserAliasStore
from termshell.core.services.local_file_system import LocalFileSystem


class TestLocalFileSystem:
    def test_resolves_relative_paths(self, tmp_path: Path) -> None:
        fs = LocalFileSystem(tmp_path)

        assert fs.get_current_directory() == str(tmp_path)
        assert fs.resolve_path(" out.txt ") == str(tmp_path / "out.txt")
        assert fs.resolve_path(str(tmp_path / "abs")) == str(tmp_path / "abs")

    def test_listing(self, tmp_path: Path) -> None:
        (tmp_path / "b.txt").write_text("", encoding="utf-8")
        (tmp_path / "a").mkdir()
        fs = LocalFileSystem(tmp_path)

        entries = fs.list_directory(".")

        assert [(e.name, e.is_directory) for e in entries] == [("a", True), ("b.txt", False)]
        assert fs.is_directory("a")
        assert fs.exists("b.txt")
        assert not fs.exists("c.txt")
        assert fs.list_directory("missing") == []

    def test_append_adds_trailing_newline(self, tmp_path: Path) -> None:
        fs = LocalFileSystem(tmp_path)

        fs.append_text("log.txt", "one")
        fs.append_text("log.txt", "two\n")

        assert (tmp_path / "log.txt").read_text(encoding="utf-8") == "one\ntwo\n"


class TestUserAliasStore:
    def test_lifecycle(self) -> None:
        store = UserAliasStore({"ll": "ls -l"})
        store.set_alias("gs", "git status")

        assert store.get_alias("gs") == "git status"
        assert store.aliases == {"ll": "ls -l", "gs": "git status"}
        assert store.remove_alias("ll") is True
        assert store.remove_alias("ll") is False
        assert store.get_alias("ll") is None

    def test_aliases_returns_a_copy(self) -> None:
        store = UserAliasStore()
        store.aliases["x"] = "y"
        assert store.get_alias("x") is None
