"""
Core data structures for command parsing and dispatch.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class PartKind(str, Enum):
    """Kind of a pipeline part: a command segment or a control operator."""

    COMMAND = "command"
    AND = "&&"
    OR = "||"
    APPEND = ">>"
    PIPE = "|"


@dataclass(frozen=True)
class CommandPart:
    """
    One segment of a split command line, or an operator between segments.

    Attributes:
        kind: Whether this part is a command or which operator it is.
        value: The trimmed command text, or the operator itself.
    """

    kind: PartKind
    value: str

    @property
    def is_operator(self) -> bool:
        return self.kind is not PartKind.COMMAND


@dataclass(frozen=True)
class ParsedArg:
    """A ``(name, value)`` pair produced from a ``--name``/``-alias`` flag."""

    name: str
    value: Any


@dataclass(frozen=True)
class ParsedToken:
    """
    A single token of a command segment in encounter order.

    Attributes:
        text: The token as it appeared (flag value quotes stripped).
        is_flag: True for ``--name``/``-alias`` tokens.
        name: Flag name (flags only).
        value: Coerced flag value, or the unquoted word.
        explicit: True when the flag carried its own ``=value``.
    """

    text: str
    is_flag: bool = False
    name: str = ""
    value: Any = None
    explicit: bool = False

    @property
    def quoted(self) -> bool:
        return not self.is_flag and self.text != self.value


@dataclass(frozen=True)
class ParsedCommand:
    """
    Result of parsing one command segment.

    Attributes:
        command_name: Bare words joined by single spaces.
        args: Flag arguments in encounter order.
        raw: The segment text that was parsed.
        tokens: Every token in encounter order.
    """

    command_name: str
    args: tuple[ParsedArg, ...] = ()
    raw: str = ""
    tokens: tuple[ParsedToken, ...] = ()

    @property
    def words(self) -> list[str]:
        return [str(t.value) for t in self.tokens if not t.is_flag]


@dataclass
class ProcessCommand:
    """
    The command handed to a processor's ``process_command``.

    Attributes:
        command: The full command name as typed (bare words).
        raw_command: The raw segment text.
        chain_commands: Tokens consumed walking into nested processors.
        args: Bound arguments keyed by canonical name and every alias.
        value: Positional remainder joined by spaces, if any.
        positionals: Positional remainder as a list.
        data: Output piped in from the previous pipeline stage.
    """

    command: str
    raw_command: str = ""
    chain_commands: list[str] = field(default_factory=list)
    args: dict[str, Any] = field(default_factory=dict)
    value: str | None = None
    positionals: list[str] = field(default_factory=list)
    data: Any = None
