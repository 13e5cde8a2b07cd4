"""Prints the shell version."""

from __future__ import annotations

import platform

from termshell import __version__
from termshell.core.commands.builtins import builtin_processor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor


@builtin_processor
class VersionProcessor(ICommandProcessor):
    command = "version"
    description = "Prints the version of the shell"
    version = __version__
    metadata = ProcessorMetadata(sealed=True, module="system")

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        context.writer.write_key_value(
            [
                ("termshell", __version__),
                ("python", platform.python_version()),
            ]
        )
        context.process.output(__version__)
