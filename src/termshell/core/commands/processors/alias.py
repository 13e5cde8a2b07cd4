"""Defines and lists user command aliases."""

from __future__ import annotations

from termshell.core.commands.builtins import builtin_processor
from termshell.core.constants import USER_ALIASES_SERVICE, ForegroundColor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor
from termshell.core.services.alias_store import UserAliasStore


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in ("'", '"'):
        return text[1:-1]
    return text


def raw_arguments(command: ProcessCommand) -> str:
    """The raw segment text after the processor's own words."""
    parts = command.raw_command.strip().split(None, 1 + len(command.chain_commands))
    return parts[-1] if len(parts) > 1 + len(command.chain_commands) else ""


@builtin_processor
class AliasProcessor(ICommandProcessor):
    command = "alias"
    description = "Creates an alias for a command line"
    metadata = ProcessorMetadata(sealed=True, module="misc")

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        store: UserAliasStore = context.get_required_service(USER_ALIASES_SERVICE)
        definition = raw_arguments(command)

        if not definition:
            aliases = store.aliases
            if not aliases:
                context.writer.write_info("No aliases defined")
                return
            context.writer.write_key_value(sorted(aliases.items()), separator=" = ")
            context.process.output(aliases)
            return

        name, separator, expansion = definition.partition("=")
        name = name.strip()
        expansion = _strip_quotes(expansion.strip())
        if not separator or not name or not expansion or " " in name:
            context.writer.write_error(
                "Invalid alias definition, expected "
                + context.writer.wrap_in_color("alias <name>=<command>", ForegroundColor.CYAN)
            )
            context.process.exit(-1, silent=True)
            return

        if context.registry.find_processor(name) is not None:
            context.writer.write_warning(
                f"'{name}' is a command and takes precedence over the alias"
            )

        store.set_alias(name, expansion)
        context.writer.write_success(f"Alias {name} -> {expansion} created")

    def write_description(self, context: CommandExecutionContext) -> None:
        writer = context.writer
        writer.writeln("Creates an alias expanding to a command line")
        writer.writeln()
        writer.writeln("Usage:")
        writer.writeln(f"  {writer.wrap_in_color('alias <name>=<command>', ForegroundColor.CYAN)}")
        writer.writeln(f"  {writer.wrap_in_color('alias', ForegroundColor.CYAN)}  lists aliases")
