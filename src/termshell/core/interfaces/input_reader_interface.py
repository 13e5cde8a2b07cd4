"""
Defines the interface for interactive prompts available to processors.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from termshell.core.domain.input_request import (
    MultiSelectOption,
    NumberOptions,
    SelectOption,
)


class IInputReader(ABC):
    """
    Blocking interactive prompts. Each call resolves to ``None`` when the
    user cancels with Escape or Ctrl+C.
    """

    @abstractmethod
    async def read_line(self, prompt: str) -> str | None: ...

    @abstractmethod
    async def read_password(self, prompt: str) -> str | None: ...

    @abstractmethod
    async def read_confirm(self, prompt: str, default_value: bool = False) -> bool | None: ...

    @abstractmethod
    async def read_select(
        self,
        prompt: str,
        options: Sequence[SelectOption],
        on_change: Callable[[str], None] | None = None,
    ) -> str | None: ...

    @abstractmethod
    async def read_number(
        self, prompt: str, options: NumberOptions | None = None
    ) -> float | int | None: ...

    @abstractmethod
    async def read_select_inline(
        self,
        prompt: str,
        options: Sequence[SelectOption],
        on_change: Callable[[str], None] | None = None,
    ) -> str | None: ...

    @abstractmethod
    async def read_multi_select(
        self, prompt: str, options: Sequence[MultiSelectOption]
    ) -> list[str] | None: ...
