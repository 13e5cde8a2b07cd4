"""Lists commands, or describes one command and its parameters."""

from __future__ import annotations

from termshell.core.commands.builtins import builtin_processor
from termshell.core.constants import DEFAULT_PROCESSOR_VERSION, ForegroundColor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import (
    ParameterDescriptor,
    ParameterType,
    ProcessorMetadata,
)
from termshell.core.interfaces.command_processor_interface import ICommandProcessor

BUILTIN_PARAMETERS = (
    ParameterDescriptor(
        name="version",
        aliases=("v",),
        type=ParameterType.BOOLEAN,
        description="Displays the version of the command",
    ),
    ParameterDescriptor(
        name="help",
        aliases=("h",),
        type=ParameterType.BOOLEAN,
        description="Displays help for the command",
    ),
)


@builtin_processor
class HelpProcessor(ICommandProcessor):
    command = "help"
    description = "Displays help for a command"
    metadata = ProcessorMetadata(sealed=True, module="system")

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        if not command.positionals:
            self._list_commands(context)
            return

        resolution = context.registry.resolve(command.positionals)
        if resolution is None:
            context.writer.write_error(f"Unknown command: {command.positionals[0]}")
            context.process.exit(-1, silent=True)
            return

        self._describe(resolution.processor, context)

    def _list_commands(self, context: CommandExecutionContext) -> None:
        writer = context.writer
        writer.writeln(writer.wrap_in_color("Available commands:", ForegroundColor.YELLOW))
        processors = sorted(
            (
                p
                for p in context.registry.processors
                if p.metadata is None or not p.metadata.hidden
            ),
            key=lambda p: p.command,
        )
        for processor in processors:
            name = writer.wrap_in_color(processor.command, ForegroundColor.CYAN)
            writer.writeln(f"  {name} - {processor.description or 'Missing description'}")
        writer.writeln()
        writer.writeln("Type `help <command>` to get more information about a specific command")

    def _describe(self, processor: ICommandProcessor, context: CommandExecutionContext) -> None:
        writer = context.writer
        label = writer.wrap_in_color("Command:", ForegroundColor.YELLOW)
        name = writer.wrap_in_color(processor.command, ForegroundColor.BLUE)
        version = processor.version or DEFAULT_PROCESSOR_VERSION
        writer.writeln(f"{label} {name} @{version} - {processor.description}")
        if processor.aliases:
            label = writer.wrap_in_color("Aliases:", ForegroundColor.YELLOW)
            writer.writeln(f"{label} {', '.join(processor.aliases)}")

        processor.write_description(context)

        if processor.processors:
            writer.writeln(writer.wrap_in_color("Subcommands:", ForegroundColor.YELLOW))
            for child in processor.processors:
                child_name = writer.wrap_in_color(child.command, ForegroundColor.BLUE)
                writer.writeln(f"  {child_name} - {child.description}")

        writer.writeln(writer.wrap_in_color("Parameters:", ForegroundColor.YELLOW))
        for parameter in (*processor.parameters, *BUILTIN_PARAMETERS):
            aliases = f" ({', '.join(parameter.aliases)})" if parameter.aliases else ""
            required = " (required)" if parameter.required else ""
            kind = getattr(parameter.type, "value", parameter.type)
            flag = writer.wrap_in_color(f"--{parameter.name}", ForegroundColor.BLUE)
            writer.writeln(f"  {flag} ({kind}){aliases} - {parameter.description}{required}")

    def write_description(self, context: CommandExecutionContext) -> None:
        writer = context.writer
        writer.writeln("Displays help for a command")
        writer.writeln("Without arguments, lists every available command")
        writer.writeln("With a command (and sub-commands), describes that command")
