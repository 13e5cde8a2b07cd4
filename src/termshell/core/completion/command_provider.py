"""
Completes command and sub-command names from the registry.
"""

from __future__ import annotations

from collections.abc import Sequence

from termshell.core.commands.registry import CommandProcessorRegistry
from termshell.core.constants import COMMAND_COMPLETION_PRIORITY
from termshell.core.domain.completion import CompletionContext
from termshell.core.interfaces.command_processor_interface import ICommandProcessor
from termshell.core.interfaces.completion_provider_interface import ICompletionProvider


def _names_with_prefix(processors: Sequence[ICommandProcessor], prefix: str) -> list[str]:
    lowered = prefix.lower()
    names: list[str] = []
    for processor in processors:
        if processor.metadata is not None and processor.metadata.hidden:
            continue
        if processor.command.lower().startswith(lowered):
            names.append(processor.command)
        names.extend(alias for alias in processor.aliases if alias.lower().startswith(lowered))
    return sorted(names)


class CommandCompletionProvider(ICompletionProvider):
    priority = COMMAND_COMPLETION_PRIORITY

    def __init__(self, registry: CommandProcessorRegistry) -> None:
        self.registry = registry

    def get_completions(self, context: CompletionContext) -> list[str]:
        if context.token_index == 0:
            return _names_with_prefix(self.registry.processors, context.token)

        if not context.tokens:
            return []
        current = self.registry.find_processor(context.tokens[0])
        if current is None or not current.processors:
            return []

        for word in context.tokens[1 : context.token_index]:
            child = next((p for p in current.processors if p.matches(word)), None)
            if child is None or not child.processors:
                return []
            current = child

        return _names_with_prefix(current.processors, context.token)
