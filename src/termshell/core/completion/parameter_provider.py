"""
Completes ``--name`` and ``-alias`` flags of the processor being typed.
"""

from __future__ import annotations

from termshell.core.commands.registry import CommandProcessorRegistry
from termshell.core.constants import PARAMETER_COMPLETION_PRIORITY
from termshell.core.domain.completion import CompletionContext
from termshell.core.interfaces.completion_provider_interface import ICompletionProvider


class ParameterCompletionProvider(ICompletionProvider):
    priority = PARAMETER_COMPLETION_PRIORITY

    def __init__(self, registry: CommandProcessorRegistry) -> None:
        self.registry = registry

    def get_completions(self, context: CompletionContext) -> list[str]:
        token = context.token
        if not token.startswith("-") or not context.tokens:
            return []

        chain = [t for t in context.tokens[1:] if not t.startswith("-")]
        processor = self.registry.find_processor(context.tokens[0], chain)
        if processor is None or not processor.parameters:
            return []

        double_dash = token.startswith("--")
        prefix = (token[2:] if double_dash else token[1:]).lower()
        results: list[str] = []
        for parameter in processor.parameters:
            if not double_dash:
                results.extend(
                    f"-{alias}" for alias in parameter.aliases if alias.lower().startswith(prefix)
                )
            if parameter.name.lower().startswith(prefix):
                results.append(f"--{parameter.name}")
        return sorted(results)
