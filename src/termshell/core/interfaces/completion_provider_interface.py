"""
Defines the interface for tab-completion providers.
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable

from termshell.core.domain.completion import CompletionContext


class ICompletionProvider(ABC):
    """
    Supplies completion candidates for a context.

    Providers are queried in ascending ``priority``; the first one that
    returns any candidate wins.
    """

    priority: int = 100

    @abstractmethod
    def get_completions(
        self, context: CompletionContext
    ) -> list[str] | Awaitable[list[str]]:
        """Return candidates for ``context.token`` (possibly empty)."""
