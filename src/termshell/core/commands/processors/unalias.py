"""Removes a user command alias."""

from __future__ import annotations

from termshell.core.commands.builtins import builtin_processor
from termshell.core.constants import USER_ALIASES_SERVICE, ForegroundColor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor
from termshell.core.services.alias_store import UserAliasStore


@builtin_processor
class UnaliasProcessor(ICommandProcessor):
    command = "unalias"
    description = "Removes aliases for commands"
    value_required = True
    metadata = ProcessorMetadata(sealed=True, module="misc")

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        store: UserAliasStore = context.get_required_service(USER_ALIASES_SERVICE)
        name = command.value or ""

        if not store.remove_alias(name):
            context.writer.write_error(f"Alias {name} not found")
            context.process.exit(-1, silent=True)
            return

        context.writer.write_success(f"Alias {name} removed")

    def write_description(self, context: CommandExecutionContext) -> None:
        writer = context.writer
        writer.writeln("Removes a previously defined command alias")
        writer.writeln()
        writer.writeln("Usage:")
        writer.writeln(f"  {writer.wrap_in_color('unalias <name>', ForegroundColor.CYAN)}")
