"""
Tests for the command, parameter and file-path completion providers.
"""

from pathlib import Path

import pytest
from termshell.core.commands.registry import CommandProcessorRegistry
from termshell.core.completion.command_provider import CommandCompletionProvider
from termshell.core.completion.engine import CompletionEngine
from termshell.core.completion.file_path_provider import FilePathCompletionProvider
from termshell.core.completion.parameter_provider import ParameterCompletionProvider
from termshell.core.domain.parameters import (
    ParameterDescriptor,
    ParameterType,
    ProcessorMetadata,
)
from termshell.core.interfaces.command_processor_interface import ICommandProcessor
from termshell.core.services.local_file_system import LocalFileSystem


class NamedProcessor(ICommandProcessor):
    def __init__(self, command: str, *children: ICommandProcessor, **attrs: object) -> None:
        super().__init__()
        self.command = command
        self.processors = list(children)
        for name, value in attrs.items():
            setattr(self, name, value)

    async def process_command(self, command, context) -> None:  # type: ignore[no-untyped-def]
        return None


@pytest.fixture
def populated_registry(registry: CommandProcessorRegistry) -> CommandProcessorRegistry:
    registry.register_processor(NamedProcessor("echo", aliases=("print",)))
    registry.register_processor(NamedProcessor("eval"))
    registry.register_processor(
        NamedProcessor("secret", metadata=ProcessorMetadata(hidden=True))
    )
    registry.register_processor(
        NamedProcessor(
            "theme",
            NamedProcessor("set", NamedProcessor("background"), NamedProcessor("border")),
            NamedProcessor("show"),
        )
    )
    registry.register_processor(
        NamedProcessor(
            "curl",
            parameters=(
                ParameterDescriptor(name="header", aliases=("H",), type=ParameterType.ARRAY),
                ParameterDescriptor(name="help-text"),
                ParameterDescriptor(name="verbose", aliases=("v",)),
            ),
        )
    )
    return registry


def _context(text: str):  # type: ignore[no-untyped-def]
    return CompletionEngine.build_context(text, len(text))


class TestCommandCompletion:
    def test_top_level_names_and_aliases(
        self, populated_registry: CommandProcessorRegistry
    ) -> None:
        provider = CommandCompletionProvider(populated_registry)

        assert provider.get_completions(_context("e")) == ["echo", "eval"]
        assert provider.get_completions(_context("pr")) == ["print"]

    def test_hidden_processors_are_skipped(
        self, populated_registry: CommandProcessorRegistry
    ) -> None:
        provider = CommandCompletionProvider(populated_registry)
        assert provider.get_completions(_context("sec")) == []

    def test_sub_commands(self, populated_registry: CommandProcessorRegistry) -> None:
        provider = CommandCompletionProvider(populated_registry)

        assert provider.get_completions(_context("theme s")) == ["set", "show"]
        assert provider.get_completions(_context("theme set b")) == [
            "background",
            "border",
        ]

    def test_no_children(self, populated_registry: CommandProcessorRegistry) -> None:
        provider = CommandCompletionProvider(populated_registry)
        assert provider.get_completions(_context("echo x")) == []


class TestParameterCompletion:
    def test_double_dash_names(self, populated_registry: CommandProcessorRegistry) -> None:
        provider = ParameterCompletionProvider(populated_registry)

        assert provider.get_completions(_context("curl --he")) == [
            "--header",
            "--help-text",
        ]

    def test_single_dash_includes_aliases(
        self, populated_registry: CommandProcessorRegistry
    ) -> None:
        provider = ParameterCompletionProvider(populated_registry)

        assert provider.get_completions(_context("curl -v")) == ["--verbose", "-v"]

    def test_non_flag_token(self, populated_registry: CommandProcessorRegistry) -> None:
        provider = ParameterCompletionProvider(populated_registry)
        assert provider.get_completions(_context("curl he")) == []


class TestFilePathCompletion:
    @pytest.fixture
    def provider(self, tmp_path: Path) -> FilePathCompletionProvider:
        (tmp_path / "notes.txt").write_text("x", encoding="utf-8")
        (tmp_path / "nested").mkdir()
        (tmp_path / "nested" / "inner.md").write_text("x", encoding="utf-8")
        (tmp_path / "other.log").write_text("x", encoding="utf-8")
        return FilePathCompletionProvider(LocalFileSystem(tmp_path))

    def test_completes_in_current_directory(
        self, provider: FilePathCompletionProvider
    ) -> None:
        assert provider.get_completions(_context("cat n")) == ["nested/", "notes.txt"]

    def test_completes_inside_directory(
        self, provider: FilePathCompletionProvider
    ) -> None:
        assert provider.get_completions(_context("cat nested/i")) == ["nested/inner.md"]

    def test_only_for_file_commands(self, provider: FilePathCompletionProvider) -> None:
        assert provider.get_completions(_context("theme n")) == []
        assert provider.get_completions(_context("n")) == []

    def test_missing_directory(self, provider: FilePathCompletionProvider) -> None:
        assert provider.get_completions(_context("cat missing/x")) == []
