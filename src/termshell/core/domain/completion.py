"""
Completion context and results exchanged with completion providers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass(frozen=True)
class CompletionContext:
    """
    What is being completed.

    Attributes:
        input: The full input line.
        cursor: Cursor offset within ``input``.
        token: The (possibly empty) token under the cursor.
        token_start: Offset where ``token`` starts.
        token_index: Index of ``token`` among the tokens before the cursor.
        tokens: All whitespace-separated tokens of ``input``.
    """

    input: str
    cursor: int
    token: str
    token_start: int
    token_index: int
    tokens: tuple[str, ...] = ()


class CompletionAction(str, Enum):
    COMPLETE = "complete"
    SHOW_CANDIDATES = "show-candidates"
    NONE = "none"


@dataclass(frozen=True)
class CompletionResult:
    """
    Outcome of one Tab press.

    ``partial`` marks a replacement that only extends the token to the
    candidates' common prefix, so no separator is appended after it.
    """

    action: CompletionAction
    replacement: str | None = None
    token_start: int | None = None
    token: str | None = None
    candidates: list[str] = field(default_factory=list)
    partial: bool = False
