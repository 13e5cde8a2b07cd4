"""
Tests for the keyed service container.
"""

import pytest
from termshell.core.common.exceptions import ServiceResolutionError
from termshell.core.di.container import (
    ServiceDescriptor,
    ServiceLifetime,
    ServiceProvider,
)


class Clock:
    pass


def test_instances_by_string_and_type_key() -> None:
    provider = ServiceProvider()
    clock = Clock()
    provider.register_instance("clock", clock)
    provider.register_instance(Clock, clock)

    assert provider.get_service("clock") is clock
    assert provider.get_required_service(Clock) is clock
    assert provider.has_service("clock")


def test_singleton_factory_is_built_once() -> None:
    provider = ServiceProvider()
    calls: list[ServiceProvider] = []

    def build(sp: ServiceProvider) -> Clock:
        calls.append(sp)
        return Clock()

    provider.register_factory(Clock, build)

    assert provider.get_service(Clock) is provider.get_service(Clock)
    assert calls == [provider]


def test_transient_factory_builds_every_time() -> None:
    provider = ServiceProvider()
    provider.register_factory(Clock, lambda sp: Clock(), ServiceLifetime.TRANSIENT)

    assert provider.get_service(Clock) is not provider.get_service(Clock)


def test_reregistering_replaces_cached_singleton() -> None:
    provider = ServiceProvider()
    provider.register_factory("clock", lambda sp: Clock())
    first = provider.get_service("clock")

    replacement = Clock()
    provider.register_instance("clock", replacement)

    assert provider.get_service("clock") is replacement
    assert first is not replacement


def test_missing_service() -> None:
    provider = ServiceProvider()

    assert provider.get_service("nope") is None
    with pytest.raises(ServiceResolutionError) as exc_info:
        provider.get_required_service(Clock)
    assert exc_info.value.service_name == "Clock"


def test_descriptor_requires_factory_or_instance() -> None:
    with pytest.raises(ValueError):
        ServiceDescriptor("clock", ServiceLifetime.SINGLETON)
