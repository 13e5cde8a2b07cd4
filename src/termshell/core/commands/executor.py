"""
Runs command lines: pipelines of segments joined by ``&&``, ``||``, ``|`` and ``>>``.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from termshell.core.commands.args_binder import ArgumentBinder, get_parameter_value
from termshell.core.commands.parser import CommandParser
from termshell.core.commands.registry import CommandProcessorRegistry
from termshell.core.common.exceptions import ProcessExitedError
from termshell.core.common.logging_utils import get_logger, redact_command_line
from termshell.core.constants import (
    DEFAULT_PROCESSOR_VERSION,
    FILE_SYSTEM_SERVICE,
    USER_ALIASES_SERVICE,
    ForegroundColor,
)
from termshell.core.context.execution_context import CommandExecutionContext
from termshell.core.domain.commands import ParsedCommand, PartKind, ProcessCommand
from termshell.core.interfaces.command_processor_interface import (
    HookTiming,
    ICommandProcessor,
)
from termshell.core.interfaces.terminal_writer_interface import ITerminalWriter
from termshell.core.services.capturing_writer import CapturingTerminalWriter

if TYPE_CHECKING:
    from termshell.core.context.execution_context import ShellContext

logger = logging.getLogger(__name__)
log = get_logger(__name__)

MAX_ALIAS_DEPTH = 10


@dataclass
class SegmentOutcome:
    """Exit status and pipeline output of one executed segment."""

    success: bool
    data: Any = None


def _declares(processor: ICommandProcessor, name: str) -> bool:
    return any(parameter.matches(name) for parameter in processor.parameters)


class CommandExecutor:
    """
    Executes parsed command lines against the processor registry.

    Skipped segments change neither the last exit status nor the pipeline
    data. A segment that runs and fails hands nothing to a following ``|``,
    while ``>>`` still writes the output of the last successful segment.
    """

    def __init__(
        self,
        registry: CommandProcessorRegistry,
        parser: CommandParser | None = None,
        binder: ArgumentBinder | None = None,
    ) -> None:
        self.registry = registry
        self.parser = parser or CommandParser()
        self.binder = binder or ArgumentBinder()

    async def execute_command(self, line: str, shell: ShellContext) -> bool:
        """
        Execute a full command line.

        Args:
            line: The raw line as typed.
            shell: The shell context supplying writer, services and reader.

        Returns:
            Whether the last executed segment succeeded.
        """
        parts = self.parser.split_by_operators(line)
        writer = shell.writer

        last_success = True
        should_run = True
        piped = False
        pipeline_data: Any = None
        append_data: Any = None

        index = 0
        while index < len(parts):
            part = parts[index]
            index += 1

            if part.kind == PartKind.AND:
                should_run, piped = last_success, False
                continue
            if part.kind == PartKind.OR:
                should_run, piped = not last_success, False
                continue
            if part.kind == PartKind.PIPE:
                should_run, piped = True, True
                continue
            if part.kind == PartKind.APPEND:
                target = parts[index] if index < len(parts) else None
                index += 1
                if target is None or target.is_operator:
                    writer.write_error("Missing file path after >>")
                    last_success = False
                    continue
                if should_run:
                    if not self._append_output(target.value, append_data, shell):
                        last_success = False
                    pipeline_data = append_data = None
                continue

            if not should_run:
                log.debug("segment_skipped", command=redact_command_line(part.value))
                continue

            outcome = await self._execute_segment(
                part.value, pipeline_data if piped else None, shell
            )
            last_success = outcome.success
            if outcome.success:
                pipeline_data = append_data = outcome.data
            else:
                pipeline_data = None
            should_run, piped = True, False

        return last_success

    async def show_help(self, command: ProcessCommand, shell: ShellContext) -> None:
        """Print help for ``command`` by running ``help <raw command>``."""
        try:
            await self.execute_command(f"help {command.raw_command}", shell)
        except Exception as e:
            logger.error("Help failed for '%s': %s", command.command, e, exc_info=True)
            shell.writer.write_error(f"Error executing command: {e}")

    async def _execute_segment(
        self,
        segment: str,
        data: Any,
        shell: ShellContext,
        alias_depth: int = 0,
    ) -> SegmentOutcome:
        parsed = self.parser.parse(segment)
        writer = shell.writer
        resolution = self.registry.resolve(parsed.words)

        if resolution is None:
            expanded = self._expand_user_alias(parsed, segment, shell)
            if expanded is not None and alias_depth < MAX_ALIAS_DEPTH:
                log.debug("alias_expanded", alias=parsed.words[0])
                return await self._execute_segment(expanded, data, shell, alias_depth + 1)
            self._write_not_found(parsed.command_name or segment, writer)
            log.info("command_not_found", command=redact_command_line(segment), exit_code=-1)
            return SegmentOutcome(success=False)

        processor = resolution.processor
        args, positionals = self.binder.collect_operands(
            parsed, processor.parameters, resolution.path_length
        )
        bound = self.binder.bind(args, processor.parameters)
        command = ProcessCommand(
            command=parsed.command_name,
            raw_command=segment,
            chain_commands=list(resolution.chain_commands),
            args=bound,
            value=" ".join(positionals) or None,
            positionals=positionals,
            data=data,
        )

        if self._version_requested(processor, bound, writer):
            return SegmentOutcome(success=True)

        if await self._help_requested(processor, command, shell):
            return SegmentOutcome(success=True)

        if not self._validate_parameters(processor, bound, writer):
            return SegmentOutcome(success=False)

        if processor.value_required and not command.value and data is None:
            writer.write_error(
                "Value required: "
                + writer.wrap_in_color(f"{command.command} <value>", ForegroundColor.CYAN)
            )
            return SegmentOutcome(success=False)

        capturing = CapturingTerminalWriter(writer)
        context = CommandExecutionContext(shell, capturing, processor)
        process = context.process

        validation = processor.validate_before_execution(command, context)
        if validation is not None and not validation.valid:
            writer.write_error(
                validation.message or "An error occurred while validating the command."
            )
            return SegmentOutcome(success=False)

        process.start()
        try:
            await self._run_hooks(processor, HookTiming.BEFORE, context)
            await processor.process_command(command, context)
            await self._run_hooks(processor, HookTiming.AFTER, context)
            process.end()
        except ProcessExitedError as e:
            if e.code != 0:
                writer.write_error(f"Process exited with code {e.code}")
            else:
                writer.write_info("Process exited successfully")
        except Exception as e:
            logger.error(
                "Processor '%s' raised while handling '%s': %s",
                processor.command,
                redact_command_line(segment),
                e,
                exc_info=True,
            )
            writer.write_error(f"Error executing command: {e}")
            process.exit(-1, silent=True)

        output = process.data if process.output_called else capturing.get_captured_data()
        log.debug(
            "segment_executed",
            command=redact_command_line(segment),
            exit_code=process.exit_code,
        )
        return SegmentOutcome(success=process.succeeded, data=output)

    async def _run_hooks(
        self,
        processor: ICommandProcessor,
        when: HookTiming,
        context: CommandExecutionContext,
    ) -> None:
        for hook in processor.hooks:
            if hook.when == when:
                await hook.execute(context)

    def _expand_user_alias(
        self, parsed: ParsedCommand, segment: str, shell: ShellContext
    ) -> str | None:
        store = shell.services.get_service(USER_ALIASES_SERVICE)
        if store is None or not parsed.words:
            return None
        expansion = store.get_alias(parsed.words[0])
        if expansion is None:
            return None
        rest = segment.strip().split(None, 1)
        return f"{expansion} {rest[1]}" if len(rest) > 1 else expansion

    def _write_not_found(self, name: str, writer: ITerminalWriter) -> None:
        writer.write_error(
            f"Command not found: {writer.wrap_in_color(name, ForegroundColor.CYAN)}"
        )
        writer.writeln()
        writer.write_info(
            f"Type {writer.wrap_in_color('help', ForegroundColor.CYAN)} "
            "for a list of available commands"
        )

    def _version_requested(
        self, processor: ICommandProcessor, bound: dict[str, Any], writer: ITerminalWriter
    ) -> bool:
        if _declares(processor, "version") or _declares(processor, "v"):
            return False
        if not (bound.get("v") or bound.get("version")):
            return False
        writer.writeln(
            writer.wrap_in_color(
                processor.version or DEFAULT_PROCESSOR_VERSION, ForegroundColor.CYAN
            )
        )
        return True

    async def _help_requested(
        self, processor: ICommandProcessor, command: ProcessCommand, shell: ShellContext
    ) -> bool:
        if self.registry.get_root_processor(processor).command == "help":
            return False
        if _declares(processor, "help") or _declares(processor, "h"):
            return False
        if not (command.args.get("h") or command.args.get("help")):
            return False
        await self.show_help(command, shell)
        return True

    def _validate_parameters(
        self, processor: ICommandProcessor, bound: dict[str, Any], writer: ITerminalWriter
    ) -> bool:
        missing = [
            parameter
            for parameter in processor.parameters
            if parameter.required
            and not any(key in bound for key in (parameter.name, *parameter.aliases))
        ]
        if missing:
            writer.write_error(
                "Missing required parameters: "
                + ", ".join(
                    writer.wrap_in_color(f"--{p.name}", ForegroundColor.CYAN) for p in missing
                )
            )
            return False

        failures: list[tuple[str, Any, str | None]] = []
        for parameter in processor.parameters:
            if parameter.validator is None:
                continue
            value = get_parameter_value(parameter, bound)
            if value is None:
                continue
            result = parameter.validator(value)
            if not result.valid:
                failures.append((parameter.name, value, result.message))

        if failures:
            writer.write_error("Invalid parameters:")
            for number, (name, value, message) in enumerate(failures, start=1):
                flag = writer.wrap_in_color(f"--{name}", ForegroundColor.CYAN)
                writer.writeln(f'  {number}. {flag} = "{value}" -> {message}')
            return False

        return True

    def _append_output(self, path: str, data: Any, shell: ShellContext) -> bool:
        if data is None:
            return True

        file_system = shell.services.get_service(FILE_SYSTEM_SERVICE)
        if file_system is None:
            shell.writer.write_error(">> redirect requires a file-system service")
            return False

        content = data if isinstance(data, str) else json.dumps(data, default=str)
        try:
            file_system.append_text(path.strip(), content)
        except OSError as e:
            logger.warning("Append to '%s' failed: %s", path.strip(), e)
            shell.writer.write_error(f">> failed: {e}")
            return False
        log.debug("output_appended", path=path.strip(), operator=">>")
        return True
