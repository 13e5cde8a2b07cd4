"""
Shell engine: wires the registry, executor, completion and input modes
together behind a single terminal.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, Iterable

from termshell import __version__
from termshell.core.commands.builtins import create_builtin_processors
from termshell.core.commands.executor import CommandExecutor
from termshell.core.commands.registry import CommandProcessorRegistry
from termshell.core.common.logging_utils import get_logger, redact_command_line
from termshell.core.completion.command_provider import CommandCompletionProvider
from termshell.core.completion.engine import CompletionEngine
from termshell.core.completion.file_path_provider import FilePathCompletionProvider
from termshell.core.completion.parameter_provider import ParameterCompletionProvider
from termshell.core.config.app_config import ShellConfig
from termshell.core.constants import (
    COMMAND_HISTORY_SERVICE,
    FILE_SYSTEM_SERVICE,
    USER_ALIASES_SERVICE,
    ForegroundColor,
)
from termshell.core.context.execution_context import (
    CommandExecutionContext,
    ShellContext,
)
from termshell.core.di.container import ServiceProvider
from termshell.core.input.command_line_mode import CommandLineMode
from termshell.core.interfaces.command_processor_interface import ICommandProcessor
from termshell.core.interfaces.terminal_interface import ITerminal
from termshell.core.services.alias_store import UserAliasStore
from termshell.core.services.command_history import CommandHistory
from termshell.core.services.local_file_system import LocalFileSystem

logger = logging.getLogger(__name__)
log = get_logger(__name__)


class ShellEngine:
    """
    The embeddable shell.

    Construct it with a terminal, ``await boot()`` once, then feed raw
    keystrokes to ``handle_input`` (or hand it a key stream with ``run``).
    Commands can also be run directly with ``execute``.
    """

    def __init__(
        self,
        terminal: ITerminal,
        config: ShellConfig | None = None,
        services: ServiceProvider | None = None,
        processors: Iterable[ICommandProcessor] | None = None,
        include_builtins: bool = True,
    ) -> None:
        self.terminal = terminal
        self.config = config or ShellConfig()
        self.services = services or ServiceProvider()
        self.registry = CommandProcessorRegistry()
        self.executor = CommandExecutor(self.registry)
        self.history = CommandHistory(
            self.config.history.file, self.config.history.max_entries
        )
        self.completion_engine = CompletionEngine()
        self.shell = ShellContext(
            terminal,
            self.registry,
            self.executor,
            self.completion_engine,
            services=self.services,
            history=self.history,
            prompt=self.config.prompt,
            password_mask=self.config.password_mask,
        )
        self._initial_processors = list(processors or [])
        self._include_builtins = include_builtins
        self._booted = False

    @property
    def booted(self) -> bool:
        return self._booted

    @property
    def exit_requested(self) -> bool:
        return self.shell.exit_requested

    async def boot(self, show_prompt: bool = True) -> None:
        """
        Register default services and processors, install the command-line
        mode and draw the first prompt. Calling it twice is a no-op.
        """
        if self._booted:
            return

        self._register_default_services()
        self.history.load()

        processors: list[ICommandProcessor] = []
        if self._include_builtins:
            # Importing the package registers every built-in processor class
            import termshell.core.commands.processors  # noqa: F401

            processors.extend(create_builtin_processors())
        processors.extend(self._initial_processors)

        self._booted = True
        await self.register_processors(processors)

        self.completion_engine.set_providers(
            [
                FilePathCompletionProvider(
                    self.services.get_required_service(FILE_SYSTEM_SERVICE)
                ),
                CommandCompletionProvider(self.registry),
                ParameterCompletionProvider(self.registry),
            ]
        )
        self.shell.push_mode(CommandLineMode(self.shell))

        log.info(
            "shell_booted",
            processors=len(self.registry.processors),
            history_entries=self.history.last_index,
        )

        if show_prompt:
            if self.config.welcome_message:
                self._write_welcome()
            self.shell.show_prompt()

    def _register_default_services(self) -> None:
        if not self.services.has_service(FILE_SYSTEM_SERVICE):
            self.services.register_instance(FILE_SYSTEM_SERVICE, LocalFileSystem())
        if not self.services.has_service(USER_ALIASES_SERVICE):
            self.services.register_instance(USER_ALIASES_SERVICE, UserAliasStore())
        if not self.services.has_service(COMMAND_HISTORY_SERVICE):
            self.services.register_instance(COMMAND_HISTORY_SERVICE, self.history)

    def _write_welcome(self) -> None:
        writer = self.shell.writer
        writer.writeln(
            f"Welcome to {writer.wrap_in_color('termshell', ForegroundColor.CYAN)} "
            f"v{__version__}"
        )
        writer.writeln(
            f"Type {writer.wrap_in_color('help', ForegroundColor.CYAN)} "
            "to list the available commands"
        )
        writer.writeln()

    async def register_processors(self, processors: Iterable[ICommandProcessor]) -> None:
        """Register processors and, once booted, run their ``initialize`` hooks."""
        for processor in processors:
            await self.register_processor(processor)

    async def register_processor(
        self, processor: ICommandProcessor, parent: ICommandProcessor | None = None
    ) -> None:
        """
        Add a processor to the registry. Top-level processors registered before
        ``boot`` are queued and initialized together with the built-ins.
        """
        if not self._booted and parent is None:
            self._initial_processors.append(processor)
            return
        self.registry.register_processor(processor, parent)
        await self._initialize(processor)

    async def _initialize(self, processor: ICommandProcessor) -> None:
        context = CommandExecutionContext(self.shell, self.shell.writer, processor)
        try:
            await processor.initialize(context)
        except Exception as e:
            logger.error(
                "Failed to initialize processor '%s': %s",
                processor.command,
                e,
                exc_info=True,
            )
            return
        for child in processor.processors:
            await self._initialize(child)

    def unregister_processor(
        self,
        processor: ICommandProcessor | str,
        parent: ICommandProcessor | None = None,
    ) -> None:
        self.registry.unregister_processor(processor, parent)

    async def handle_input(self, data: str) -> None:
        """Feed raw terminal data to the active input mode."""
        await self.shell.handle_input(data)

    async def wait_idle(self) -> None:
        await self.shell.wait_idle()

    async def execute(self, line: str) -> bool:
        """Run a command line outside the keystroke flow and return its success."""
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Executing '%s'", redact_command_line(line))
        return await self.executor.execute_command(line, self.shell)

    async def run(self, keys: AsyncIterable[str]) -> None:
        """
        Drive the shell from a stream of raw keystrokes.

        Returns when the stream ends or an exit is requested; a command still
        running when the stream ends is awaited first.
        """
        if not self._booted:
            await self.boot()

        iterator = keys.__aiter__()
        exit_wait = asyncio.ensure_future(self.shell.wait_exit())
        try:
            while not self.exit_requested:
                next_key = asyncio.ensure_future(iterator.__anext__())
                done, _ = await asyncio.wait(
                    {next_key, exit_wait}, return_when=asyncio.FIRST_COMPLETED
                )
                if next_key not in done:
                    next_key.cancel()
                    break
                try:
                    data = next_key.result()
                except StopAsyncIteration:
                    break
                await self.handle_input(data)
            await self.wait_idle()
        finally:
            exit_wait.cancel()
            self.history.save()
        log.info("shell_stopped", exit_requested=self.exit_requested)
