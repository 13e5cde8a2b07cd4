"""
Binds parsed flag arguments onto a processor's declared parameters.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from termshell.core.commands.parser import CommandParser
from termshell.core.domain.commands import ParsedArg, ParsedCommand, ParsedToken
from termshell.core.domain.parameters import ParameterDescriptor, ParameterType

_TRUTHY_STRINGS = {"true", "1", "yes", "y"}


def _find_descriptor(
    name: str, parameters: Sequence[ParameterDescriptor]
) -> ParameterDescriptor | None:
    for descriptor in parameters:
        if descriptor.matches(name):
            return descriptor
    return None


def _takes_following(
    descriptor: ParameterDescriptor | None, following: ParsedToken
) -> bool:
    if descriptor is None:
        return following.quoted
    return descriptor.takes_value


def _is_truthy(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value in _TRUTHY_STRINGS
    return value == 1


class ArgumentBinder:
    """Maps ``ParsedArg`` pairs onto ``ParameterDescriptor`` schemas.

    Binding never fails: unknown names pass through verbatim and invalid
    values are left for the processor's validators.
    """

    @staticmethod
    def bind(
        args: Sequence[ParsedArg], parameters: Sequence[ParameterDescriptor]
    ) -> dict[str, Any]:
        """Bind ``args`` and return values keyed by canonical name and every alias."""
        bound: dict[str, Any] = {}
        for arg in args:
            descriptor = _find_descriptor(arg.name, parameters)
            if descriptor is None:
                bound[arg.name] = arg.value
                continue

            if descriptor.type == ParameterType.ARRAY:
                existing = bound.get(descriptor.name)
                value: Any = (
                    [*existing, arg.value] if isinstance(existing, list) else [arg.value]
                )
            elif descriptor.type == ParameterType.BOOLEAN:
                value = _is_truthy(arg.value)
            else:
                value = arg.value

            bound[descriptor.name] = value
            for alias in descriptor.aliases:
                bound[alias] = value
        return bound

    @staticmethod
    def collect_operands(
        parsed: ParsedCommand,
        parameters: Sequence[ParameterDescriptor],
        path_length: int,
    ) -> tuple[list[ParsedArg], list[str]]:
        """
        Split a parsed segment into flag arguments and positional operands.

        The first ``path_length`` bare words name the processor and are
        skipped. A flag given without ``=value`` may take the following
        word as its value: a flag declared with a value-taking type takes
        any word, so ``-H a -H b`` binds ``a`` and ``b``; an undeclared flag
        takes only a quoted word (``--title "My note"``); a boolean flag
        never takes one, so ``cp -r "my src" dest`` keeps both operands.

        Returns:
            ``(args, positionals)`` in encounter order.
        """
        args: list[ParsedArg] = []
        positionals: list[str] = []
        words_seen = 0
        tokens = parsed.tokens
        index = 0

        while index < len(tokens):
            token = tokens[index]
            index += 1

            if not token.is_flag:
                if words_seen >= path_length:
                    positionals.append(str(token.value))
                words_seen += 1
                continue

            following = tokens[index] if index < len(tokens) else None
            if (
                not token.explicit
                and following is not None
                and not following.is_flag
                and words_seen >= path_length
                and _takes_following(_find_descriptor(token.name, parameters), following)
            ):
                args.append(
                    ParsedArg(token.name, CommandParser.parse_value(following.value))
                )
                index += 1
                continue

            args.append(ParsedArg(token.name, token.value))

        return args, positionals


def get_parameter_value(descriptor: ParameterDescriptor, bound: dict[str, Any]) -> Any:
    """Look a parameter up by canonical name then alias, else its default."""
    for key in (descriptor.name, *descriptor.aliases):
        if key in bound:
            return bound[key]
    return descriptor.default_value
