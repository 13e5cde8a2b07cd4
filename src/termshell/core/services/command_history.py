"""
Command history with optional JSON persistence.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class CommandHistory:
    """
    Ordered list of executed command lines, oldest first.

    Blank lines and immediate repeats are not recorded. When ``file_path`` is
    set, the history is loaded from and saved to a JSON array at that path.
    """

    def __init__(self, file_path: str | Path | None = None, max_entries: int = 1000) -> None:
        self.file_path = Path(file_path).expanduser() if file_path else None
        self.max_entries = max_entries
        self._commands: list[str] = []

    def load(self) -> None:
        if self.file_path is None or not self.file_path.exists():
            return
        try:
            entries = json.loads(self.file_path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read history file %s: %s", self.file_path, e)
            return
        if not isinstance(entries, list):
            logger.warning("Ignoring history file %s: expected a JSON array", self.file_path)
            return
        self._commands = [str(entry) for entry in entries][-self.max_entries :]
        logger.debug("Loaded %d history entries", len(self._commands))

    def save(self) -> None:
        if self.file_path is None:
            return
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            self.file_path.write_text(json.dumps(self._commands), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not write history file %s: %s", self.file_path, e)

    def add_command(self, command: str) -> None:
        command = command.strip()
        if not command:
            return
        if self._commands and self._commands[-1] == command:
            return
        self._commands.append(command)
        if len(self._commands) > self.max_entries:
            del self._commands[: len(self._commands) - self.max_entries]
        self.save()

    def get_command(self, index: int) -> str | None:
        if 0 <= index < len(self._commands):
            return self._commands[index]
        return None

    @property
    def last_index(self) -> int:
        """Index one past the newest entry."""
        return len(self._commands)

    def get_history(self) -> list[str]:
        return list(self._commands)

    def clear(self) -> None:
        self._commands.clear()
        self.save()
