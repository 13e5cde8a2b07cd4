"""
Keyed service container handed to processors through their execution context.

Services are registered under a key, either a type or a string token such as
``"file-system"``, as a ready instance or a factory receiving the provider.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from enum import Enum, auto
from typing import Any

from termshell.core.common.exceptions import ServiceResolutionError

logger = logging.getLogger(__name__)

ServiceKey = Hashable


class ServiceLifetime(Enum):
    """Defines the lifetime of a service in the container."""

    TRANSIENT = auto()
    SINGLETON = auto()


class ServiceDescriptor:
    """Describes a service registration in the container."""

    def __init__(
        self,
        key: ServiceKey,
        lifetime: ServiceLifetime,
        factory: Callable[[ServiceProvider], Any] | None = None,
        instance: Any | None = None,
    ):
        """Initialize a service descriptor.

        Args:
            key: The lookup key of the service
            lifetime: The lifetime of the service
            factory: Factory function to create the service
            instance: An existing instance (for singleton services)
        """
        if factory is None and instance is None:
            raise ValueError("Either factory or instance must be provided")
        self.key = key
        self.lifetime = lifetime
        self.factory = factory
        self.instance = instance


def _key_name(key: ServiceKey) -> str:
    return getattr(key, "__name__", str(key))


class ServiceProvider:
    """Resolves registered services by key."""

    def __init__(self, descriptors: dict[ServiceKey, ServiceDescriptor] | None = None) -> None:
        self._descriptors: dict[ServiceKey, ServiceDescriptor] = dict(descriptors or {})
        self._singleton_instances: dict[ServiceKey, Any] = {}

    def register_instance(self, key: ServiceKey, instance: Any) -> None:
        self._descriptors[key] = ServiceDescriptor(
            key, ServiceLifetime.SINGLETON, instance=instance
        )
        self._singleton_instances.pop(key, None)

    def register_factory(
        self,
        key: ServiceKey,
        factory: Callable[[ServiceProvider], Any],
        lifetime: ServiceLifetime = ServiceLifetime.SINGLETON,
    ) -> None:
        self._descriptors[key] = ServiceDescriptor(key, lifetime, factory=factory)
        self._singleton_instances.pop(key, None)

    def has_service(self, key: ServiceKey) -> bool:
        return key in self._descriptors

    def get_service(self, key: ServiceKey) -> Any | None:
        """Get a service registered under ``key`` if any."""
        descriptor = self._descriptors.get(key)
        if descriptor is None:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug(
                    "No service registered for %s; registered=%d",
                    _key_name(key),
                    len(self._descriptors),
                )
            return None

        if descriptor.instance is not None:
            return descriptor.instance

        if descriptor.lifetime == ServiceLifetime.SINGLETON:
            if key not in self._singleton_instances:
                self._singleton_instances[key] = descriptor.factory(self)  # type: ignore[misc]
            return self._singleton_instances[key]

        return descriptor.factory(self)  # type: ignore[misc]

    def get_required_service(self, key: ServiceKey) -> Any:
        """Get a service registered under ``key``, raising if not found."""
        service = self.get_service(key)
        if service is None:
            name = _key_name(key)
            raise ServiceResolutionError(
                f"No service registered for {name}", service_name=name
            )
        return service
