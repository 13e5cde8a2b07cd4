"""
Defines the interface for input modes held on the input mode stack.
"""

from abc import ABC, abstractmethod


class IInputMode(ABC):
    """Owner of raw terminal input while it is on top of the stack."""

    @abstractmethod
    async def handle_input(self, data: str) -> None:
        """Handle raw terminal data (characters, escape sequences, control chars)."""

    def activate(self) -> None:
        """Called when this mode becomes the active input mode."""

    def deactivate(self) -> None:
        """Called when this mode stops being the active input mode."""
