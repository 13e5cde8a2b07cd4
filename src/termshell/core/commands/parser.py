"""
Parses raw command lines into pipeline parts and command segments.
"""

import re
from typing import Any

from termshell.core.domain.commands import (
    CommandPart,
    ParsedArg,
    ParsedCommand,
    ParsedToken,
    PartKind,
)

_TWO_CHAR_OPERATORS = {
    "&&": PartKind.AND,
    "||": PartKind.OR,
    ">>": PartKind.APPEND,
}

_TOKEN_PATTERN = re.compile(
    r"""
    (?P<flag>--?(?P<name>[A-Za-z0-9_][A-Za-z0-9_-]*)
        (?:=(?P<value>"[^"]*"|'[^']*'|\S+))?)(?=\s|$)
    |(?P<quoted>"[^"]*"|'[^']*')(?=\s|$)
    |(?P<word>\S+)
    """,
    re.VERBOSE,
)

_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


class CommandParser:
    """Splits command lines by control operator and parses each segment."""

    @staticmethod
    def split_by_operators(line: str) -> list[CommandPart]:
        """
        Split a raw command line into command parts and operators.

        Operators inside single or double quotes are literal text. The
        two-character operators are recognised before ``|`` so that ``||``
        is never split into two pipes.

        Args:
            line: The full raw input line.

        Returns:
            Command and operator parts in encounter order.
        """
        parts: list[CommandPart] = []
        current: list[str] = []
        in_single = False
        in_double = False

        def _flush() -> None:
            text = "".join(current).strip()
            if text:
                parts.append(CommandPart(PartKind.COMMAND, text))
            current.clear()

        i = 0
        while i < len(line):
            char = line[i]

            if char == "'" and not in_double:
                in_single = not in_single
                current.append(char)
            elif char == '"' and not in_single:
                in_double = not in_double
                current.append(char)
            elif in_single or in_double:
                current.append(char)
            elif line[i : i + 2] in _TWO_CHAR_OPERATORS:
                operator = line[i : i + 2]
                _flush()
                parts.append(CommandPart(_TWO_CHAR_OPERATORS[operator], operator))
                i += 1
            elif char == "|":
                _flush()
                parts.append(CommandPart(PartKind.PIPE, "|"))
            else:
                current.append(char)
            i += 1

        _flush()
        return parts

    def parse(self, segment: str) -> ParsedCommand:
        """
        Parse one command segment into a command name and flag arguments.

        Recognises ``--name=value``, ``-alias``, quoted strings and bare words.
        A flag without ``=value`` is ``True`` here; whether it takes the
        following word (``--name "quoted value"``) depends on the declared
        parameter and is decided by ``ArgumentBinder.collect_operands``. Bare
        and quoted words are joined with single spaces to form the command name.

        Args:
            segment: The command text of one pipeline segment.

        Returns:
            The parsed command; an empty ``command_name`` when nothing parsed.
        """
        tokens: list[ParsedToken] = []
        for match in _TOKEN_PATTERN.finditer(segment):
            if match.group("flag"):
                value = match.group("value")
                tokens.append(
                    ParsedToken(
                        text=match.group(0),
                        is_flag=True,
                        name=match.group("name"),
                        value=self.parse_value(_unquote(value)) if value is not None else True,
                        explicit=value is not None,
                    )
                )
            elif match.group("quoted"):
                quoted = match.group("quoted")
                tokens.append(ParsedToken(text=quoted, value=_unquote(quoted)))
            else:
                word = match.group("word")
                tokens.append(ParsedToken(text=word, value=word))

        args = tuple(ParsedArg(t.name, t.value) for t in tokens if t.is_flag)
        words = [str(t.value) for t in tokens if not t.is_flag]

        return ParsedCommand(
            command_name=" ".join(words),
            args=args,
            raw=segment,
            tokens=tuple(tokens),
        )

    @staticmethod
    def parse_value(value: Any) -> Any:
        """Coerce numeric-looking and boolean-looking strings."""
        if not isinstance(value, str):
            return value
        if _NUMBER_PATTERN.match(value):
            if any(c in value for c in ".eE"):
                return float(value)
            return int(value)
        if value in ("true", "false"):
            return value == "true"
        return value
