"""
Exit status and explicit output of the command currently executing.
"""

from __future__ import annotations

from typing import Any

from termshell.core.common.exceptions import ProcessExitedError


class ExecutionProcess:
    """
    Lifecycle of one command segment.

    ``exit_code`` stays ``None`` while the command runs; ``None`` or ``0``
    after it finishes means success.
    """

    def __init__(self) -> None:
        self.running = False
        self.exited = False
        self.exit_code: int | None = None
        self.data: Any = None
        self.output_called = False

    def start(self) -> None:
        self.running = True
        self.exited = False
        self.exit_code = None
        self.data = None
        self.output_called = False

    def end(self) -> None:
        self.running = False
        if self.exit_code is None:
            self.exit_code = 0

    def exit(self, code: int = 0, silent: bool = False) -> None:
        """
        Terminate the command with ``code``.

        Raises:
            ProcessExitedError: Unless ``silent``, to unwind the handler.
        """
        self.exited = True
        self.running = False
        self.exit_code = code
        if not silent:
            raise ProcessExitedError(code)

    def output(self, data: Any) -> None:
        """Set the value forwarded to the next pipeline stage."""
        self.data = data
        self.output_called = True

    @property
    def succeeded(self) -> bool:
        return self.exit_code is None or self.exit_code == 0
