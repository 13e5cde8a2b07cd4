"""
Tests for the completion engine's first-tab/second-tab state machine.
"""

from collections.abc import Sequence

import pytest
from termshell.core.completion.engine import CompletionEngine, common_prefix
from termshell.core.domain.completion import CompletionAction, CompletionContext
from termshell.core.interfaces.completion_provider_interface import ICompletionProvider


class StaticProvider(ICompletionProvider):
    def __init__(self, candidates: Sequence[str], priority: int = 100) -> None:
        self.candidates = list(candidates)
        self.priority = priority
        self.calls = 0

    def get_completions(self, context: CompletionContext) -> list[str]:
        self.calls += 1
        return [c for c in self.candidates if c.startswith(context.token)]


class AsyncProvider(ICompletionProvider):
    def __init__(self, candidates: Sequence[str]) -> None:
        self.candidates = list(candidates)

    async def get_completions(self, context: CompletionContext) -> list[str]:
        return [c for c in self.candidates if c.startswith(context.token)]


@pytest.mark.asyncio
async def test_single_match_completes() -> None:
    engine = CompletionEngine([StaticProvider(["help", "history"])])

    result = await engine.complete("hel", 3)

    assert result.action == CompletionAction.COMPLETE
    assert result.replacement == "help"
    assert result.token == "hel"
    assert result.token_start == 0
    assert result.partial is False


@pytest.mark.asyncio
async def test_ambiguous_then_second_tab_shows_candidates() -> None:
    engine = CompletionEngine([StaticProvider(["echo", "eval"])])

    first = await engine.complete("e", 1)
    second = await engine.complete("e", 1)

    assert first.action == CompletionAction.NONE
    assert second.action == CompletionAction.SHOW_CANDIDATES
    assert second.candidates == ["echo", "eval"]


@pytest.mark.asyncio
async def test_common_prefix_extension_then_candidates() -> None:
    engine = CompletionEngine([StaticProvider(["history", "historian"])])

    first = await engine.complete("hi", 2)
    assert first.action == CompletionAction.COMPLETE
    assert first.replacement == "histori"
    assert first.partial is True

    second = await engine.complete("histori", 7)
    assert second.action == CompletionAction.SHOW_CANDIDATES
    assert second.candidates == ["history", "historian"]


@pytest.mark.asyncio
async def test_no_candidates() -> None:
    engine = CompletionEngine([StaticProvider(["echo"])])

    assert (await engine.complete("zz", 2)).action == CompletionAction.NONE
    assert (await engine.complete("zz", 2)).action == CompletionAction.NONE


@pytest.mark.asyncio
async def test_reset_state_restarts_the_cycle() -> None:
    engine = CompletionEngine([StaticProvider(["echo", "eval"])])

    await engine.complete("e", 1)
    engine.reset_state()
    result = await engine.complete("e", 1)

    assert result.action == CompletionAction.NONE


@pytest.mark.asyncio
async def test_changed_input_restarts_the_cycle() -> None:
    engine = CompletionEngine([StaticProvider(["echo", "eval", "exit"])])

    await engine.complete("e", 1)
    result = await engine.complete("ex", 2)

    assert result.action == CompletionAction.COMPLETE
    assert result.replacement == "exit"


@pytest.mark.asyncio
async def test_providers_queried_by_priority_first_match_wins() -> None:
    low = StaticProvider(["files.txt"], priority=50)
    high = StaticProvider(["fetch"], priority=100)
    engine = CompletionEngine([high, low])

    result = await engine.complete("f", 1)

    assert result.replacement == "files.txt"
    assert high.calls == 0
    assert engine.providers == [low, high]


@pytest.mark.asyncio
async def test_falls_through_empty_providers() -> None:
    engine = CompletionEngine()
    engine.add_provider(StaticProvider([], priority=10))
    engine.add_provider(StaticProvider(["fetch"], priority=20))

    result = await engine.complete("fe", 2)

    assert result.replacement == "fetch"


@pytest.mark.asyncio
async def test_async_provider() -> None:
    engine = CompletionEngine([AsyncProvider(["version"])])

    result = await engine.complete("ver", 3)

    assert result.replacement == "version"


class TestBuildContext:
    def test_token_under_cursor(self) -> None:
        context = CompletionEngine.build_context("hash sh", 7)
        assert context.token == "sh"
        assert context.token_start == 5
        assert context.token_index == 1
        assert context.tokens == ("hash", "sh")

    def test_after_space(self) -> None:
        context = CompletionEngine.build_context("hash ", 5)
        assert context.token == ""
        assert context.token_start == 5
        assert context.token_index == 1

    def test_empty_input(self) -> None:
        context = CompletionEngine.build_context("", 0)
        assert context.token == ""
        assert context.token_index == 0

    def test_cursor_in_middle(self) -> None:
        context = CompletionEngine.build_context("ec tail", 2)
        assert context.token == "ec"
        assert context.token_index == 0
        assert context.tokens == ("ec", "tail")


def test_common_prefix() -> None:
    assert common_prefix(["history", "historian"]) == "histori"
    assert common_prefix([]) == ""
