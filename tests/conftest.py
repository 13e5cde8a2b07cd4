import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest
import pytest_asyncio
from termshell.core.commands.registry import CommandProcessorRegistry
from termshell.core.config.app_config import ShellConfig
from termshell.core.constants import FILE_SYSTEM_SERVICE, KEY_ENTER
from termshell.core.di.container import ServiceProvider
from termshell.core.engine import ShellEngine
from termshell.core.interfaces.terminal_interface import ITerminal
from termshell.core.services.capturing_writer import strip_ansi
from termshell.core.services.local_file_system import LocalFileSystem


class RecordingTerminal(ITerminal):
    """Terminal double that keeps everything written to it."""

    def __init__(self, cols: int = 80, rows: int = 24) -> None:
        self.output: list[str] = []
        self._cols = cols
        self._rows = rows
        self.resize_callbacks: list[Callable[[int, int], None]] = []

    def write(self, text: str) -> None:
        self.output.append(text)

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def rows(self) -> int:
        return self._rows

    def on_resize(self, callback: Callable[[int, int], None]) -> None:
        self.resize_callbacks.append(callback)

    @property
    def text(self) -> str:
        return "".join(self.output)

    @property
    def plain_text(self) -> str:
        """Everything written, without colour codes."""
        return strip_ansi(self.text)

    def reset(self) -> None:
        self.output.clear()


async def type_line(engine: ShellEngine, line: str) -> None:
    """Type ``line`` key by key, press Enter and wait for the command."""
    for char in line:
        await engine.handle_input(char)
    await engine.handle_input(KEY_ENTER)
    await engine.wait_idle()


@pytest.fixture
def terminal() -> RecordingTerminal:
    return RecordingTerminal()


@pytest.fixture
def registry() -> CommandProcessorRegistry:
    return CommandProcessorRegistry()


@pytest.fixture
def shell_config() -> ShellConfig:
    return ShellConfig(welcome_message=False)


@pytest_asyncio.fixture
async def engine(
    terminal: RecordingTerminal, shell_config: ShellConfig, tmp_path: Path
) -> ShellEngine:
    """A booted shell whose file-system service is rooted at ``tmp_path``."""
    services = ServiceProvider()
    services.register_instance(FILE_SYSTEM_SERVICE, LocalFileSystem(tmp_path))
    shell = ShellEngine(terminal, shell_config, services=services)
    await shell.boot()
    terminal.reset()
    return shell


async def wait_for_prompt(engine: ShellEngine, attempts: int = 100) -> None:
    """Let the running command progress until it is waiting on a reader prompt."""
    for _ in range(attempts):
        if engine.shell.active_input_request is not None:
            return
        await asyncio.sleep(0)
    raise AssertionError("no reader prompt became active")


async def press(engine: ShellEngine, *keys: str) -> None:
    for key in keys:
        await engine.handle_input(key)
