"""
Local-disk implementation of the filesystem collaborator.
"""

from __future__ import annotations

import logging
from pathlib import Path

from termshell.core.interfaces.file_system_interface import DirectoryEntry, IFileSystem

logger = logging.getLogger(__name__)


class LocalFileSystem(IFileSystem):
    """Resolves paths against a working directory on the local disk."""

    def __init__(self, root: str | Path | None = None) -> None:
        self._cwd = Path(root) if root is not None else Path.cwd()

    def get_current_directory(self) -> str:
        return str(self._cwd)

    def resolve_path(self, path: str) -> str:
        candidate = Path(path.strip()).expanduser()
        if not candidate.is_absolute():
            candidate = self._cwd / candidate
        return str(candidate)

    def exists(self, path: str) -> bool:
        return Path(self.resolve_path(path)).exists()

    def is_directory(self, path: str) -> bool:
        return Path(self.resolve_path(path)).is_dir()

    def list_directory(self, path: str) -> list[DirectoryEntry]:
        directory = Path(self.resolve_path(path))
        try:
            children = list(directory.iterdir())
        except OSError as e:
            logger.debug("Cannot list %s: %s", directory, e)
            return []
        return sorted(
            (DirectoryEntry(child.name, child.is_dir()) for child in children),
            key=lambda entry: entry.name,
        )

    def append_text(self, path: str, text: str) -> None:
        target = Path(self.resolve_path(path))
        if not text.endswith("\n"):
            text += "\n"
        with target.open("a", encoding="utf-8") as handle:
            handle.write(text)
