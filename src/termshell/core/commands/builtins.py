"""
Decorator-based catalogue of the built-in processors.
"""

from collections.abc import Callable

from termshell.core.interfaces.command_processor_interface import ICommandProcessor

_registry: dict[str, type[ICommandProcessor]] = {}


def builtin_processor(cls: type[ICommandProcessor]) -> type[ICommandProcessor]:
    """
    A decorator to register a built-in processor class.

    Raises:
        ValueError: If a processor with the same command is already registered.
    """
    name = cls.command
    if not name:
        raise ValueError(f"{cls.__name__} does not declare a command")
    if name in _registry:
        raise ValueError(f"Processor '{name}' is already registered.")
    _registry[name] = cls
    return cls


def get_builtin_processor(name: str) -> type[ICommandProcessor] | None:
    return _registry.get(name)


def get_all_builtin_processors() -> dict[str, type[ICommandProcessor]]:
    """Gets all registered built-in processor classes keyed by command."""
    return _registry.copy()


def create_builtin_processors(
    factory: Callable[[type[ICommandProcessor]], ICommandProcessor] | None = None,
) -> list[ICommandProcessor]:
    """Instantiate every registered built-in processor."""
    make = factory or (lambda cls: cls())
    return [make(cls) for cls in _registry.values()]
