"""Clears the terminal."""

from __future__ import annotations

from termshell.core.commands.builtins import builtin_processor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor


@builtin_processor
class ClearProcessor(ICommandProcessor):
    command = "clear"
    aliases = ("cls",)
    description = "Clears the terminal"
    metadata = ProcessorMetadata(sealed=True, module="system")

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        context.clear_screen()
