"""
Shell-wide and per-command execution contexts.

``ShellContext`` owns the terminal, the input mode stack, the pending
interactive request and the running command. ``CommandExecutionContext`` is
what a processor sees while it runs: a capturing writer, the reader, its
own process, the abort channel and keyed services.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from termshell.core.common.exceptions import InputModeStackError
from termshell.core.common.logging_utils import redact_command_line
from termshell.core.constants import DEFAULT_PASSWORD_MASK, DEFAULT_PROMPT, ERASE_LINE
from termshell.core.context.abort_signal import AbortSignal
from termshell.core.context.execution_process import ExecutionProcess
from termshell.core.di.container import ServiceKey, ServiceProvider
from termshell.core.domain.input_request import InputRequest
from termshell.core.input.line_buffer import LineBuffer
from termshell.core.input.reader_mode import ReaderMode
from termshell.core.interfaces.input_mode_interface import IInputMode
from termshell.core.interfaces.terminal_interface import ITerminal
from termshell.core.interfaces.terminal_writer_interface import ITerminalWriter
from termshell.core.services.command_history import CommandHistory
from termshell.core.services.input_reader import InputReader
from termshell.core.services.terminal_writer import TerminalWriter

if TYPE_CHECKING:
    from termshell.core.commands.executor import CommandExecutor
    from termshell.core.commands.registry import CommandProcessorRegistry
    from termshell.core.completion.engine import CompletionEngine
    from termshell.core.interfaces.command_processor_interface import (
        ICommandProcessor,
    )

logger = logging.getLogger(__name__)


class ShellContext:
    """State shared by the input modes, the executor and running commands."""

    def __init__(
        self,
        terminal: ITerminal,
        registry: CommandProcessorRegistry,
        executor: CommandExecutor,
        completion_engine: CompletionEngine,
        services: ServiceProvider | None = None,
        history: CommandHistory | None = None,
        prompt: str = DEFAULT_PROMPT,
        password_mask: str = DEFAULT_PASSWORD_MASK,
    ) -> None:
        self.terminal = terminal
        self.registry = registry
        self.executor = executor
        self.completion_engine = completion_engine
        self.services = services or ServiceProvider()
        self.history = history or CommandHistory()
        self.prompt = prompt
        self.password_mask = password_mask

        self.writer: ITerminalWriter = TerminalWriter(terminal)
        self.reader = InputReader(self)
        self.line_buffer = LineBuffer()
        self.abort_signal = AbortSignal()

        self._active_input_request: InputRequest | None = None
        self._modes: list[IInputMode] = []
        self._command_task: asyncio.Task[None] | None = None
        self._exit_event = asyncio.Event()

    # Input mode stack

    @property
    def current_mode(self) -> IInputMode | None:
        return self._modes[-1] if self._modes else None

    @property
    def mode_depth(self) -> int:
        return len(self._modes)

    def push_mode(self, mode: IInputMode) -> None:
        current = self.current_mode
        if current is not None:
            current.deactivate()
        self._modes.append(mode)
        mode.activate()

    def pop_mode(self) -> IInputMode:
        """
        Pop the top mode and reactivate the one below it.

        Raises:
            InputModeStackError: If only the base mode is left.
        """
        if len(self._modes) <= 1:
            raise InputModeStackError()
        popped = self._modes.pop()
        popped.deactivate()
        self._modes[-1].activate()
        return popped

    async def handle_input(self, data: str) -> None:
        """Route raw terminal data to the mode on top of the stack."""
        mode = self.current_mode
        if mode is not None:
            await mode.handle_input(data)

    # Interactive requests

    @property
    def active_input_request(self) -> InputRequest | None:
        return self._active_input_request

    def set_active_input_request(self, request: InputRequest | None) -> None:
        self._active_input_request = request
        if request is not None:
            self.push_mode(ReaderMode(self))

    def write_to_terminal(self, text: str) -> None:
        self.terminal.write(text)

    # Prompt

    def show_prompt(self, new_line: bool = False, keep_buffer: bool = False) -> None:
        if new_line:
            self.terminal.write("\r\n")
        if not keep_buffer:
            self.line_buffer.clear()
        self.terminal.write(self.prompt + self.line_buffer.text)

    def refresh_line(self) -> None:
        buffer = self.line_buffer
        self.terminal.write(ERASE_LINE + self.prompt + buffer.text)
        offset = len(buffer.text) - buffer.cursor_position
        if offset > 0:
            self.terminal.write(f"\x1b[{offset}D")

    # Running commands

    @property
    def is_command_running(self) -> bool:
        return self._command_task is not None

    def start_command(self, line: str) -> asyncio.Task[None]:
        """Run ``line`` in the background so keystrokes keep flowing."""
        self.abort_signal = AbortSignal()
        task = asyncio.get_running_loop().create_task(self._run_command(line))
        self._command_task = task
        return task

    async def _run_command(self, line: str) -> None:
        try:
            await self.executor.execute_command(line, self)
        except Exception as e:
            logger.error(
                "Unhandled error executing '%s': %s",
                redact_command_line(line),
                e,
                exc_info=True,
            )
            self.writer.write_error(f"Error executing command: {e}")
        finally:
            self._command_task = None
            if not self.exit_requested:
                self.show_prompt()

    async def wait_idle(self) -> None:
        """Wait until the running command, if any, has finished."""
        while self._command_task is not None:
            await self._command_task

    def abort(self) -> None:
        self.abort_signal.trigger()

    # Session lifetime

    @property
    def exit_requested(self) -> bool:
        return self._exit_event.is_set()

    def request_exit(self) -> None:
        self._exit_event.set()

    async def wait_exit(self) -> None:
        await self._exit_event.wait()


class CommandExecutionContext:
    """What a processor sees while handling one command segment."""

    def __init__(
        self,
        shell: ShellContext,
        writer: ITerminalWriter,
        processor: ICommandProcessor | None = None,
    ) -> None:
        self.shell = shell
        self.writer = writer
        self.processor = processor
        self.process = ExecutionProcess()
        self.abort_signal = shell.abort_signal

    @property
    def reader(self) -> InputReader:
        return self.shell.reader

    @property
    def services(self) -> ServiceProvider:
        return self.shell.services

    @property
    def registry(self) -> CommandProcessorRegistry:
        return self.shell.registry

    @property
    def executor(self) -> CommandExecutor:
        return self.shell.executor

    @property
    def history(self) -> CommandHistory:
        return self.shell.history

    @property
    def terminal(self) -> ITerminal:
        return self.shell.terminal

    def on_abort(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Subscribe to the abort channel; returns the unsubscribe function."""
        return self.abort_signal.subscribe(callback)

    def get_service(self, key: ServiceKey) -> Any | None:
        return self.services.get_service(key)

    def get_required_service(self, key: ServiceKey) -> Any:
        return self.services.get_required_service(key)

    def clear_screen(self) -> None:
        self.shell.terminal.clear()
