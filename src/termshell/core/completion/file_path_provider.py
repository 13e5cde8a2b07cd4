"""
Completes file and directory names for commands taking paths.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from termshell.core.constants import FILE_PATH_COMPLETION_PRIORITY
from termshell.core.domain.completion import CompletionContext
from termshell.core.interfaces.completion_provider_interface import ICompletionProvider
from termshell.core.interfaces.file_system_interface import IFileSystem

logger = logging.getLogger(__name__)

DEFAULT_FILE_COMMANDS = frozenset(
    {
        "ls",
        "cd",
        "cat",
        "cp",
        "mv",
        "rm",
        "touch",
        "mkdir",
        "rmdir",
        "tree",
        "echo",
        "edit",
    }
)


class FilePathCompletionProvider(ICompletionProvider):
    """Runs before command completion, but only for path-taking commands."""

    priority = FILE_PATH_COMPLETION_PRIORITY

    def __init__(
        self,
        file_system: IFileSystem,
        file_commands: Iterable[str] = DEFAULT_FILE_COMMANDS,
    ) -> None:
        self.file_system = file_system
        self.file_commands = frozenset(file_commands)

    def get_completions(self, context: CompletionContext) -> list[str]:
        if context.token_index == 0 or not context.tokens:
            return []
        if context.tokens[0] not in self.file_commands:
            return []
        if context.token.startswith("-"):
            return []
        return self._complete_path(context.token)

    def _complete_path(self, partial: str) -> list[str]:
        if "/" in partial:
            slash = partial.rfind("/")
            directory = partial[:slash] or "/"
            name_prefix = partial[slash + 1 :]
            shown_prefix = partial[: slash + 1]
        else:
            directory = self.file_system.get_current_directory()
            name_prefix = partial
            shown_prefix = ""

        try:
            resolved = self.file_system.resolve_path(directory)
            if not self.file_system.is_directory(resolved):
                return []
            entries = self.file_system.list_directory(resolved)
        except OSError as e:
            logger.debug("Path completion failed for '%s': %s", partial, e)
            return []

        lowered = name_prefix.lower()
        results = []
        for entry in entries:
            if entry.name.lower().startswith(lowered):
                suffix = "/" if entry.is_directory else ""
                results.append(f"{shown_prefix}{entry.name}{suffix}")
        return sorted(results)
