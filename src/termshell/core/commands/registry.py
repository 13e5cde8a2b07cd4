"""
The processor registry: a forest of command processors.

Each top-level slot holds the most recent processor registered under a
command name. Extending processors keep the processor they replaced in
``original_processor`` so unregistering them restores it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from termshell.core.common.exceptions import ProcessorRegistrationError
from termshell.core.interfaces.command_processor_interface import ICommandProcessor

logger = logging.getLogger(__name__)


@dataclass
class ProcessorResolution:
    """
    Result of resolving the bare words of a command.

    Attributes:
        processor: The deepest processor matching a prefix of the words.
        chain_commands: Words consumed walking into nested processors.
        remaining: Words left over after the resolved path.
    """

    processor: ICommandProcessor
    chain_commands: list[str] = field(default_factory=list)
    remaining: list[str] = field(default_factory=list)

    @property
    def path_length(self) -> int:
        return 1 + len(self.chain_commands)


def _link_children(processor: ICommandProcessor) -> None:
    for child in processor.processors:
        child.parent = processor
        _link_children(child)


class CommandProcessorRegistry:
    """Registration and lookup of top-level and nested processors."""

    def __init__(self) -> None:
        self._processors: list[ICommandProcessor] = []

    @property
    def processors(self) -> list[ICommandProcessor]:
        """The processors currently occupying top-level slots."""
        return list(self._processors)

    def register_processor(
        self, processor: ICommandProcessor, parent: ICommandProcessor | None = None
    ) -> None:
        """
        Register a processor at top level, or as a child of ``parent``.

        An existing processor with the same command name is replaced, unless
        the incoming processor extends it, in which case it is kept as the
        new processor's ``original_processor``. A sealed processor can only
        be replaced by an extending one.

        Raises:
            ProcessorRegistrationError: If the processor has no command name.
        """
        if not processor.command:
            raise ProcessorRegistrationError(
                "Cannot register a processor without a command name",
                processor=type(processor).__name__,
            )

        collection = parent.processors if parent is not None else self._processors
        _link_children(processor)
        processor.parent = parent

        index = self._slot_index(processor.command, collection)
        if index is None:
            collection.append(processor)
            logger.debug("Registered processor '%s'", processor.command)
            return

        existing = collection[index]
        if processor.extends_processor:
            processor.original_processor = existing
            collection[index] = processor
            logger.debug(
                "Processor '%s' extends %s",
                processor.command,
                type(existing).__name__,
            )
        elif existing.sealed:
            logger.warning(
                "Refusing to replace sealed processor '%s' with %s",
                existing.command,
                type(processor).__name__,
            )
        else:
            collection[index] = processor
            logger.debug("Replaced processor '%s'", processor.command)

    def unregister_processor(
        self,
        processor: ICommandProcessor | str,
        parent: ICommandProcessor | None = None,
    ) -> None:
        """
        Remove the processor occupying a command slot.

        Sealed processors are left in place. An extending processor is
        replaced by the processor it extended.
        """
        name = processor if isinstance(processor, str) else processor.command
        collection = parent.processors if parent is not None else self._processors
        index = self._slot_index(name, collection)
        if index is None:
            return

        current = collection[index]
        if current.sealed:
            logger.debug("Ignoring unregister of sealed processor '%s'", name)
            return

        if current.extends_processor and current.original_processor is not None:
            collection[index] = current.original_processor
            logger.debug("Restored original processor for '%s'", name)
        else:
            del collection[index]
            logger.debug("Unregistered processor '%s'", name)

    def find_processor(
        self, main_command: str, chain_commands: Sequence[str] = ()
    ) -> ICommandProcessor | None:
        """Find the deepest processor matching ``main_command`` and a prefix of the chain."""
        return self.find_processor_in_collection(
            main_command, chain_commands, self._processors
        )

    def find_processor_in_collection(
        self,
        main_command: str,
        chain_commands: Sequence[str],
        processors: Sequence[ICommandProcessor],
    ) -> ICommandProcessor | None:
        found = next((p for p in processors if p.matches(main_command)), None)
        if found is None:
            return None
        if not chain_commands:
            return found
        child = self.find_processor_in_collection(
            chain_commands[0], chain_commands[1:], found.processors
        )
        return child or found

    def resolve(self, words: Sequence[str]) -> ProcessorResolution | None:
        """
        Resolve bare command words to a processor.

        ``theme set background red`` with a ``set`` child under ``theme``
        resolves to ``set`` with chain ``["set"]`` and remaining
        ``["background", "red"]``.
        """
        if not words:
            return None
        processor = next((p for p in self._processors if p.matches(words[0])), None)
        if processor is None:
            return None

        chain: list[str] = []
        for word in words[1:]:
            child = next((p for p in processor.processors if p.matches(word)), None)
            if child is None:
                break
            chain.append(word)
            processor = child

        return ProcessorResolution(
            processor=processor,
            chain_commands=chain,
            remaining=list(words[1 + len(chain) :]),
        )

    def get_root_processor(self, processor: ICommandProcessor) -> ICommandProcessor:
        while processor.parent is not None:
            processor = processor.parent
        return processor

    @staticmethod
    def _slot_index(name: str, collection: Sequence[ICommandProcessor]) -> int | None:
        lowered = name.lower()
        for index, existing in enumerate(collection):
            if existing.command.lower() == lowered:
                return index
        return None
