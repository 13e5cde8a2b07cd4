"""
Defines the interface for the filesystem collaborator used by ``>>`` and path completion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    is_directory: bool


class IFileSystem(ABC):
    @abstractmethod
    def get_current_directory(self) -> str: ...

    @abstractmethod
    def resolve_path(self, path: str) -> str: ...

    @abstractmethod
    def exists(self, path: str) -> bool: ...

    @abstractmethod
    def is_directory(self, path: str) -> bool: ...

    @abstractmethod
    def list_directory(self, path: str) -> list[DirectoryEntry]: ...

    @abstractmethod
    def append_text(self, path: str, text: str) -> None:
        """Append ``text`` to ``path``, creating the file when missing."""
