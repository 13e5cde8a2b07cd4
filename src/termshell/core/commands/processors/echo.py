"""Prints its text, or the data piped into it."""

from __future__ import annotations

from termshell.core.commands.builtins import builtin_processor
from termshell.core.constants import ForegroundColor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor


@builtin_processor
class EchoProcessor(ICommandProcessor):
    command = "echo"
    aliases = ("print",)
    description = "Prints the specified text"
    metadata = ProcessorMetadata(module="misc")

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        text = command.value if command.value is not None else command.data
        if text is None:
            text = ""

        if isinstance(text, (dict, list)):
            context.writer.write_json(text)
        else:
            context.writer.writeln(str(text))

        context.process.output(text)

    def write_description(self, context: CommandExecutionContext) -> None:
        writer = context.writer
        writer.writeln("Prints the specified text to the terminal")
        writer.writeln("Piped JSON values are printed as JSON")
        writer.writeln()
        writer.writeln("Usage:")
        writer.writeln(f"  {writer.wrap_in_color('echo <text>', ForegroundColor.CYAN)}")
