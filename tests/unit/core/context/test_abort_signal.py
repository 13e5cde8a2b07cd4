"""
Tests for the abort channel handed to running commands.
"""

import asyncio
import logging

import pytest
from termshell.core.context.abort_signal import AbortSignal


@pytest.mark.asyncio
async def test_subscribers_are_notified_once() -> None:
    signal = AbortSignal()
    calls: list[str] = []
    signal.subscribe(lambda: calls.append("a"))

    signal.trigger()
    signal.trigger()

    assert calls == ["a"]
    assert signal.is_set()


@pytest.mark.asyncio
async def test_unsubscribe() -> None:
    signal = AbortSignal()
    calls: list[str] = []
    unsubscribe = signal.subscribe(lambda: calls.append("a"))

    unsubscribe()
    unsubscribe()
    signal.trigger()

    assert calls == []


@pytest.mark.asyncio
async def test_failing_listener_does_not_stop_others(
    caplog: pytest.LogCaptureFixture,
) -> None:
    signal = AbortSignal()
    calls: list[str] = []

    def broken() -> None:
        raise RuntimeError("listener broke")

    signal.subscribe(broken)
    signal.subscribe(lambda: calls.append("b"))

    with caplog.at_level(logging.WARNING):
        signal.trigger()

    assert calls == ["b"]
    assert "Abort listener failed" in caplog.text


@pytest.mark.asyncio
async def test_wait_returns_after_trigger() -> None:
    signal = AbortSignal()
    waiter = asyncio.ensure_future(signal.wait())
    await asyncio.sleep(0)
    assert not waiter.done()

    signal.trigger()
    await asyncio.wait_for(waiter, timeout=1)
