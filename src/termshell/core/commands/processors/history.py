"""Shows or clears the command history."""

from __future__ import annotations

from termshell.core.commands.builtins import builtin_processor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor


def _write_history(context: CommandExecutionContext) -> None:
    entries = context.history.get_history()
    if not entries:
        context.writer.write_info("History is empty")
        return
    width = len(str(len(entries)))
    for number, entry in enumerate(entries, start=1):
        context.writer.writeln(f"  {str(number).rjust(width)}  {entry}")
    context.process.output(entries)


class HistoryListProcessor(ICommandProcessor):
    command = "list"
    description = "Prints the command history"

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        _write_history(context)


class HistoryClearProcessor(ICommandProcessor):
    command = "clear"
    description = "Clears the command history"

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        confirmed = await context.reader.read_confirm("Clear the command history?")
        if not confirmed:
            context.writer.write_info("History kept")
            return
        context.history.clear()
        context.writer.write_success("Command history cleared")


@builtin_processor
class HistoryProcessor(ICommandProcessor):
    command = "history"
    aliases = ("hist",)
    description = "Prints the command history of the session"
    metadata = ProcessorMetadata(sealed=True, module="system")

    def __init__(self) -> None:
        super().__init__()
        self.processors = [HistoryListProcessor(), HistoryClearProcessor()]

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        _write_history(context)
