"""
Tests for the processor registry: extension chains, sealing and nested lookup.
"""

from collections.abc import Sequence

import pytest
from termshell.core.commands.registry import CommandProcessorRegistry
from termshell.core.common.exceptions import ProcessorRegistrationError
from termshell.core.domain.parameters import ProcessorMetadata
from termshell.core.interfaces.command_processor_interface import ICommandProcessor


class StubProcessor(ICommandProcessor):
    def __init__(
        self,
        command: str,
        aliases: Sequence[str] = (),
        extends: bool = False,
        sealed: bool = False,
        children: Sequence[ICommandProcessor] = (),
    ) -> None:
        super().__init__()
        self.command = command
        self.aliases = tuple(aliases)
        self.extends_processor = extends
        self.metadata = ProcessorMetadata(sealed=True) if sealed else None
        self.processors = list(children)

    async def process_command(self, command, context) -> None:  # type: ignore[no-untyped-def]
        return None


def test_register_and_find_by_alias(registry: CommandProcessorRegistry) -> None:
    echo = StubProcessor("echo", aliases=["print"])
    registry.register_processor(echo)

    assert registry.find_processor("echo") is echo
    assert registry.find_processor("PRINT") is echo
    assert registry.find_processor("missing") is None


def test_register_without_command_raises(registry: CommandProcessorRegistry) -> None:
    with pytest.raises(ProcessorRegistrationError):
        registry.register_processor(StubProcessor(""))


def test_same_name_replaces_existing(registry: CommandProcessorRegistry) -> None:
    first = StubProcessor("ls")
    second = StubProcessor("ls")
    registry.register_processor(first)
    registry.register_processor(second)

    assert registry.processors == [second]
    assert second.original_processor is None


def test_extension_chain_and_unregister(registry: CommandProcessorRegistry) -> None:
    base = StubProcessor("ls")
    ext1 = StubProcessor("ls", extends=True)
    ext2 = StubProcessor("ls", extends=True)

    registry.register_processor(base)
    registry.register_processor(ext1)
    registry.register_processor(ext2)

    assert registry.find_processor("ls") is ext2
    assert ext2.original_processor is ext1
    assert ext1.original_processor is base

    registry.unregister_processor(ext2)
    assert registry.find_processor("ls") is ext1

    registry.unregister_processor("ls")
    assert registry.find_processor("ls") is base

    registry.unregister_processor("ls")
    assert registry.find_processor("ls") is None


def test_sealed_processor_survives_unregister(registry: CommandProcessorRegistry) -> None:
    help_processor = StubProcessor("help", sealed=True)
    registry.register_processor(help_processor)

    registry.unregister_processor(help_processor)

    assert registry.find_processor("help") is help_processor


def test_sealed_processor_refuses_plain_replacement(
    registry: CommandProcessorRegistry,
) -> None:
    sealed = StubProcessor("help", sealed=True)
    registry.register_processor(sealed)

    registry.register_processor(StubProcessor("help"))

    assert registry.find_processor("help") is sealed


def test_sealed_processor_can_be_extended(registry: CommandProcessorRegistry) -> None:
    sealed = StubProcessor("help", sealed=True)
    extension = StubProcessor("help", extends=True)
    registry.register_processor(sealed)
    registry.register_processor(extension)

    assert registry.find_processor("help") is extension
    assert extension.original_processor is sealed


def test_nested_resolution(registry: CommandProcessorRegistry) -> None:
    set_processor = StubProcessor("set")
    theme = StubProcessor("theme", children=[set_processor, StubProcessor("reset")])
    registry.register_processor(theme)

    resolution = registry.resolve(["theme", "set", "background", "red"])

    assert resolution is not None
    assert resolution.processor is set_processor
    assert resolution.chain_commands == ["set"]
    assert resolution.remaining == ["background", "red"]
    assert resolution.path_length == 2
    assert set_processor.parent is theme
    assert registry.get_root_processor(set_processor) is theme


def test_resolution_stops_at_deepest_match(registry: CommandProcessorRegistry) -> None:
    theme = StubProcessor("theme", children=[StubProcessor("set")])
    registry.register_processor(theme)

    resolution = registry.resolve(["theme", "unknown", "value"])

    assert resolution is not None
    assert resolution.processor is theme
    assert resolution.chain_commands == []
    assert resolution.remaining == ["unknown", "value"]


def test_resolve_unknown_or_empty(registry: CommandProcessorRegistry) -> None:
    assert registry.resolve([]) is None
    assert registry.resolve(["nope"]) is None


def test_find_processor_with_chain(registry: CommandProcessorRegistry) -> None:
    leaf = StubProcessor("leaf")
    branch = StubProcessor("branch", children=[leaf])
    registry.register_processor(StubProcessor("root", children=[branch]))

    assert registry.find_processor("root", ["branch", "leaf"]) is leaf
    assert registry.find_processor("root", ["branch", "other"]) is branch


def test_register_and_unregister_child(registry: CommandProcessorRegistry) -> None:
    theme = StubProcessor("theme")
    registry.register_processor(theme)
    child = StubProcessor("list")

    registry.register_processor(child, parent=theme)
    assert registry.find_processor("theme", ["list"]) is child
    assert child.parent is theme

    registry.unregister_processor("list", parent=theme)
    assert theme.processors == []
