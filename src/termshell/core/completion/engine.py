"""
Tab completion with bash-style first-tab/second-tab behaviour.

The first Tab on an input completes a single candidate fully, or extends
the token to the candidates' common prefix. A further Tab on the same
input lists every candidate.
"""

from __future__ import annotations

import inspect
import logging
import os
from collections.abc import Iterable

from termshell.core.domain.completion import (
    CompletionAction,
    CompletionContext,
    CompletionResult,
)
from termshell.core.interfaces.completion_provider_interface import ICompletionProvider

logger = logging.getLogger(__name__)


def common_prefix(candidates: list[str]) -> str:
    if not candidates:
        return ""
    return os.path.commonprefix(candidates)


class CompletionEngine:
    """Queries providers in ascending priority; the first non-empty answer wins."""

    def __init__(self, providers: Iterable[ICompletionProvider] | None = None) -> None:
        self._providers: list[ICompletionProvider] = []
        self._last_candidates: list[str] = []
        self._tab_count = 0
        self._last_input = ""
        if providers is not None:
            self.set_providers(providers)

    @property
    def providers(self) -> list[ICompletionProvider]:
        return list(self._providers)

    def set_providers(self, providers: Iterable[ICompletionProvider]) -> None:
        self._providers = sorted(providers, key=lambda provider: provider.priority)

    def add_provider(self, provider: ICompletionProvider) -> None:
        self._providers.append(provider)
        self._providers.sort(key=lambda p: p.priority)

    def reset_state(self) -> None:
        """Forget the tab count; called on every non-Tab keystroke."""
        self._tab_count = 0
        self._last_candidates = []
        self._last_input = ""

    async def complete(self, input: str, cursor: int) -> CompletionResult:
        context = self.build_context(input, cursor)

        if input == self._last_input:
            self._tab_count += 1
        else:
            self._tab_count = 1
            self._last_input = input
            self._last_candidates = []

        if self._tab_count == 1:
            candidates = await self._fetch_completions(context)
            self._last_candidates = candidates

            if not candidates:
                return CompletionResult(CompletionAction.NONE)

            if len(candidates) == 1:
                self._last_input = ""
                self._tab_count = 0
                return CompletionResult(
                    CompletionAction.COMPLETE,
                    replacement=candidates[0],
                    token_start=context.token_start,
                    token=context.token,
                )

            prefix = common_prefix(candidates)
            if len(prefix) > len(context.token):
                end = context.token_start + len(context.token)
                self._last_input = input[: context.token_start] + prefix + input[end:]
                return CompletionResult(
                    CompletionAction.COMPLETE,
                    replacement=prefix,
                    token_start=context.token_start,
                    token=context.token,
                    partial=True,
                )

            return CompletionResult(CompletionAction.NONE)

        if len(self._last_candidates) > 1:
            return CompletionResult(
                CompletionAction.SHOW_CANDIDATES,
                candidates=list(self._last_candidates),
            )

        return CompletionResult(CompletionAction.NONE)

    @staticmethod
    def build_context(input: str, cursor: int) -> CompletionContext:
        before_cursor = input[:cursor]
        tokens = before_cursor.split()

        if not tokens or before_cursor.endswith(" "):
            token = ""
            token_start = cursor
            token_index = len(tokens)
        else:
            token = tokens[-1]
            token_start = before_cursor.rfind(token)
            token_index = len(tokens) - 1

        return CompletionContext(
            input=input,
            cursor=cursor,
            token=token,
            token_start=token_start,
            token_index=token_index,
            tokens=tuple(input.split()),
        )

    async def _fetch_completions(self, context: CompletionContext) -> list[str]:
        for provider in self._providers:
            result = provider.get_completions(context)
            if inspect.isawaitable(result):
                result = await result
            if result:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "%s offered %d candidates for '%s'",
                        type(provider).__name__,
                        len(result),
                        context.token,
                    )
                return list(result)
        return []
