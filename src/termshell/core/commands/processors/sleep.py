"""Waits for a number of milliseconds, or until aborted."""

from __future__ import annotations

import asyncio
import contextlib

from termshell.core.commands.builtins import builtin_processor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor


@builtin_processor
class SleepProcessor(ICommandProcessor):
    command = "sleep"
    description = "Waits for the given number of milliseconds"
    value_required = True
    metadata = ProcessorMetadata(module="misc")

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        try:
            milliseconds = float(command.value or "")
        except ValueError:
            context.writer.write_error(f"Invalid duration: {command.value}")
            context.process.exit(-1, silent=True)
            return

        with contextlib.suppress(asyncio.TimeoutError):
            await asyncio.wait_for(
                context.abort_signal.wait(), timeout=max(0.0, milliseconds) / 1000
            )

        if context.abort_signal.is_set():
            context.writer.write_warning("Sleep aborted")
            context.process.exit(130, silent=True)
