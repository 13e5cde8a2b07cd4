"""
Parameter descriptors declared by command processors.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ParameterType(str, Enum):
    """Declared value types of a processor parameter."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    message: str | None = None


@dataclass(frozen=True)
class ParameterDescriptor:
    """
    Declared shape of one named argument a processor accepts.

    Attributes:
        name: Canonical name (``--name``).
        description: Help text.
        aliases: Alternative names (``-alias`` / ``--alias``).
        type: One of ``ParameterType`` or a custom type name.
        required: Whether execution is refused when the argument is absent.
        default_value: Value documented in help; not injected by the binder.
        validator: Optional callable returning a ``ValidationResult``.
    """

    name: str
    description: str = ""
    aliases: tuple[str, ...] = ()
    type: ParameterType | str = ParameterType.STRING
    required: bool = False
    default_value: Any = None
    validator: Callable[[Any], ValidationResult] | None = field(
        default=None, compare=False
    )

    def matches(self, name: str) -> bool:
        return name == self.name or name in self.aliases

    @property
    def takes_value(self) -> bool:
        """True when a bare flag may consume the following word as its value."""
        return self.type != ParameterType.BOOLEAN


@dataclass
class ProcessorMetadata:
    """Registry-level flags attached to a processor."""

    sealed: bool = False
    hidden: bool = False
    module: str | None = None
    icon: str | None = None
