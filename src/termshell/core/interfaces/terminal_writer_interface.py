"""
Defines the interface for terminal writers handed to processors.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from termshell.core.constants import BackgroundColor, ForegroundColor


class ITerminalWriter(ABC):
    """
    Output channel of a command.

    ``write``/``writeln``/``write_json``/``write_objects_as_table``/``write_table``
    are stdout-equivalent; ``write_error``/``write_warning``/``write_info``/
    ``write_success`` are diagnostics (stderr-equivalent).
    """

    @abstractmethod
    def write(self, text: str) -> None: ...

    @abstractmethod
    def writeln(self, text: str | None = None) -> None: ...

    @abstractmethod
    def write_json(self, value: Any) -> None: ...

    @abstractmethod
    def write_objects_as_table(self, objects: Sequence[Mapping[str, Any]]) -> None: ...

    @abstractmethod
    def write_table(self, headers: Sequence[str], rows: Sequence[Sequence[str]]) -> None: ...

    @abstractmethod
    def write_success(self, message: str) -> None: ...

    @abstractmethod
    def write_info(self, message: str) -> None: ...

    @abstractmethod
    def write_warning(self, message: str) -> None: ...

    @abstractmethod
    def write_error(self, message: str) -> None: ...

    @abstractmethod
    def wrap_in_color(self, text: str, color: ForegroundColor) -> str: ...

    @abstractmethod
    def wrap_in_background_color(self, text: str, color: BackgroundColor) -> str: ...

    @abstractmethod
    def write_divider(self, length: int | None = None, char: str = "-") -> None: ...

    @abstractmethod
    def write_list(self, items: Sequence[str], ordered: bool = False, prefix: str = "") -> None: ...

    @abstractmethod
    def write_key_value(
        self, entries: Mapping[str, Any] | Sequence[tuple[str, Any]], separator: str = ": "
    ) -> None: ...
