"""
Cooperative cancellation channel handed to running commands.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

logger = logging.getLogger(__name__)


class AbortSignal:
    """
    One-shot abort notification.

    Handlers subscribe a callback or await ``wait()``; the shell triggers the
    signal on Ctrl+C or Escape. Nothing is force-terminated: handlers are
    expected to unwind promptly once notified.
    """

    def __init__(self) -> None:
        self._listeners: list[Callable[[], None]] = []
        self._event = asyncio.Event()

    def is_set(self) -> bool:
        return self._event.is_set()

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that removes it."""
        self._listeners.append(callback)
        return lambda: self.unsubscribe(callback)

    def unsubscribe(self, callback: Callable[[], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def trigger(self) -> None:
        if self._event.is_set():
            return
        self._event.set()
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.warning("Abort listener failed: %s", e, exc_info=True)

    async def wait(self) -> None:
        await self._event.wait()
