"""
Defines the interface for command processors (the handler contract).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from termshell.core.constants import DEFAULT_PROCESSOR_VERSION
from termshell.core.domain.commands import ProcessCommand
from termshell.core.domain.parameters import (
    ParameterDescriptor,
    ProcessorMetadata,
    ValidationResult,
)

if TYPE_CHECKING:
    from termshell.core.context.execution_context import CommandExecutionContext


class HookTiming(str, Enum):
    """When a processor hook runs relative to ``process_command``."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class ProcessorHook:
    """
    A callback run around a processor's ``process_command``.

    After-hooks run only when the handler returns normally; a handler that
    exits through ``context.process.exit`` skips them.
    """

    when: HookTiming
    execute: Callable[[CommandExecutionContext], Awaitable[None]]


class ICommandProcessor(ABC):
    """
    A registered command handler, top-level or nested.

    Subclasses declare their shape through class attributes and implement
    ``process_command``. ``original_processor`` is wired by the registry when
    ``extends_processor`` is set and a processor with the same command already
    exists; an extension may delegate to it or swallow the call entirely.
    """

    command: str = ""
    aliases: tuple[str, ...] = ()
    description: str = ""
    version: str = DEFAULT_PROCESSOR_VERSION
    parameters: tuple[ParameterDescriptor, ...] = ()
    value_required: bool = False
    hooks: tuple[ProcessorHook, ...] = ()
    extends_processor: bool = False
    metadata: ProcessorMetadata | None = None

    def __init__(self) -> None:
        self.processors: list[ICommandProcessor] = []
        self.original_processor: ICommandProcessor | None = None
        self.parent: ICommandProcessor | None = None

    @property
    def sealed(self) -> bool:
        return bool(self.metadata and self.metadata.sealed)

    def matches(self, name: str) -> bool:
        """Case-insensitive match against the command name or an alias."""
        lowered = name.lower()
        return self.command.lower() == lowered or any(
            alias.lower() == lowered for alias in self.aliases
        )

    @abstractmethod
    async def process_command(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> None:
        """
        Handles the command.

        Args:
            command: The resolved command with bound arguments.
            context: The per-command execution context.
        """

    def write_description(self, context: CommandExecutionContext) -> None:
        context.writer.writeln(self.description or self.command)

    async def initialize(self, context: CommandExecutionContext) -> None:
        """Called once when the processor is registered with a booted engine."""

    def validate_before_execution(
        self, command: ProcessCommand, context: CommandExecutionContext
    ) -> ValidationResult | None:
        return None
