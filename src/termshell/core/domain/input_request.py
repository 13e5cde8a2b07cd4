"""
Interactive prompt requests owned by the reader input mode.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class InputRequestType(str, Enum):
    LINE = "line"
    PASSWORD = "password"
    CONFIRM = "confirm"
    SELECT = "select"
    SELECT_INLINE = "select-inline"
    MULTI_SELECT = "multi-select"
    NUMBER = "number"


@dataclass(frozen=True)
class SelectOption:
    label: str
    value: str


@dataclass(frozen=True)
class MultiSelectOption(SelectOption):
    checked: bool = False


@dataclass(frozen=True)
class NumberOptions:
    minimum: float | None = None
    maximum: float | None = None
    default: float | None = None


@dataclass
class InputRequest:
    """
    One pending interactive prompt.

    ``resolve`` settles the awaiting reader call; ``None`` is the
    cancellation sentinel.
    """

    type: InputRequestType
    prompt_text: str
    resolve: Callable[[Any], None]
    buffer: str = ""
    cursor_position: int = 0
    default_value: bool | None = None
    options: list[SelectOption] = field(default_factory=list)
    selected_index: int = 0
    checked_indices: set[int] = field(default_factory=set)
    on_change: Callable[[str], None] | None = None
    number_options: NumberOptions | None = None
