"""
User-defined command aliases.
"""

from __future__ import annotations


class UserAliasStore:
    """Maps an alias name to the command line it expands to."""

    def __init__(self, aliases: dict[str, str] | None = None) -> None:
        self._aliases: dict[str, str] = dict(aliases or {})

    def set_alias(self, name: str, command: str) -> None:
        self._aliases[name] = command

    def remove_alias(self, name: str) -> bool:
        return self._aliases.pop(name, None) is not None

    def get_alias(self, name: str) -> str | None:
        return self._aliases.get(name)

    @property
    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)
