"""Hash digests of text or piped data."""

from __future__ import annotations

import hashlib
import json

from termshell.core.commands.builtins import builtin_processor
from termshell.core.constants import ForegroundColor
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor

ALGORITHMS = (
    ("sha256", "sha256", "SHA-256", ("sha-256",)),
    ("sha1", "sha1", "SHA-1", ("sha-1",)),
    ("sha384", "sha384", "SHA-384", ("sha-384",)),
    ("sha512", "sha512", "SHA-512", ("sha-512",)),
)


class HashAlgorithmProcessor(ICommandProcessor):
    """Digest with one ``hashlib`` algorithm."""

    value_required = True

    def __init__(self, command: str, algorithm: str, label: str, aliases: tuple[str, ...]) -> None:
        super().__init__()
        self.command = command
        self.aliases = aliases
        self.algorithm = algorithm
        self.label = label
        self.description = f"Generate {label} hash"

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        source = command.value if command.value is not None else command.data
        text = source if isinstance(source, str) else json.dumps(source)
        digest = hashlib.new(self.algorithm, text.encode("utf-8")).hexdigest()
        context.writer.writeln(digest)
        context.process.output(digest)

    def write_description(self, context: CommandExecutionContext) -> None:
        writer = context.writer
        writer.writeln(f"Generate a {self.label} hash digest of the input text")
        writer.writeln()
        writer.writeln("Usage:")
        usage = f"hash {self.command} <text>"
        writer.writeln(f"  {writer.wrap_in_color(usage, ForegroundColor.CYAN)}")


@builtin_processor
class HashProcessor(ICommandProcessor):
    command = "hash"
    description = "Generate hash digests of text"
    metadata = ProcessorMetadata(module="misc")

    def __init__(self) -> None:
        super().__init__()
        self.processors = [
            HashAlgorithmProcessor(command, algorithm, label, aliases)
            for command, algorithm, label, aliases in ALGORITHMS
        ]

    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        await context.executor.show_help(command, context.shell)

    def write_description(self, context: CommandExecutionContext) -> None:
        writer = context.writer
        writer.writeln("Generate cryptographic hash digests")
        writer.writeln()
        writer.writeln("Usage:")
        for child in self.processors:
            usage = f"hash {child.command} <text>"
            colored = writer.wrap_in_color(usage, ForegroundColor.CYAN)
            writer.writeln(f"  {colored}  {child.description}")
