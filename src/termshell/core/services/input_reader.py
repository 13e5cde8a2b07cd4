"""
Interactive prompts issued by running commands.

Each ``read_*`` call writes its prompt, installs an ``InputRequest`` on the
host (which pushes the reader input mode) and suspends until the request is
resolved by keystrokes or cancelled with Escape/Ctrl+C.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from termshell.core.common.exceptions import (
    InputRequestActiveError,
    InvalidSelectOptionsError,
)
from termshell.core.constants import RESET, ForegroundColor
from termshell.core.domain.input_request import (
    InputRequest,
    InputRequestType,
    MultiSelectOption,
    NumberOptions,
    SelectOption,
)
from termshell.core.interfaces.input_reader_interface import IInputReader


class InputReaderHost(Protocol):
    """What the reader needs from the shell context."""

    @property
    def active_input_request(self) -> InputRequest | None: ...

    def set_active_input_request(self, request: InputRequest | None) -> None: ...

    def write_to_terminal(self, text: str) -> None: ...


def render_select_options(options: Sequence[SelectOption], selected_index: int) -> str:
    """Render select options, marking the current one with ``>``."""
    lines = []
    for index, option in enumerate(options):
        if index == selected_index:
            lines.append(f"  {ForegroundColor.CYAN.value}> {option.label}{RESET}\r\n")
        else:
            lines.append(f"    {option.label}\r\n")
    return "".join(lines)


def render_inline_select_options(
    options: Sequence[SelectOption], selected_index: int
) -> str:
    """Render options on one line, bracketing the current one."""
    parts = []
    for index, option in enumerate(options):
        if index == selected_index:
            parts.append(f"{ForegroundColor.CYAN.value}[ {option.label} ]{RESET}")
        else:
            parts.append(f"  {option.label}  ")
    return "".join(parts)


def render_multi_select_options(
    options: Sequence[SelectOption], selected_index: int, checked: set[int]
) -> str:
    """Render checkbox options, marking the current one with ``>``."""
    lines = []
    for index, option in enumerate(options):
        box = "[x]" if index in checked else "[ ]"
        if index == selected_index:
            lines.append(
                f"  {ForegroundColor.CYAN.value}> {box} {option.label}{RESET}\r\n"
            )
        else:
            lines.append(f"    {box} {option.label}\r\n")
    return "".join(lines)


def number_prompt(prompt: str, options: NumberOptions | None) -> str:
    hints: list[str] = []
    if options is not None:
        if options.minimum is not None and options.maximum is not None:
            hints.append(f"{options.minimum}-{options.maximum}")
        elif options.minimum is not None:
            hints.append(f">={options.minimum}")
        elif options.maximum is not None:
            hints.append(f"<={options.maximum}")
        if options.default is not None:
            hints.append(f"default: {options.default}")
    if hints:
        return f"{prompt} ({', '.join(hints)}): "
    return f"{prompt}: "


class InputReader(IInputReader):
    """Prompt implementation backed by the input mode stack."""

    def __init__(self, host: InputReaderHost) -> None:
        self._host = host

    async def read_line(self, prompt: str) -> str | None:
        return await self._request(InputRequestType.LINE, prompt, prompt)

    async def read_password(self, prompt: str) -> str | None:
        return await self._request(InputRequestType.PASSWORD, prompt, prompt)

    async def read_confirm(self, prompt: str, default_value: bool = False) -> bool | None:
        hint = "(Y/n)" if default_value else "(y/N)"
        display_prompt = f"{prompt} {hint}: "
        return await self._request(
            InputRequestType.CONFIRM,
            display_prompt,
            display_prompt,
            default_value=default_value,
        )

    async def read_select(
        self,
        prompt: str,
        options: Sequence[SelectOption],
        on_change: Callable[[str], None] | None = None,
    ) -> str | None:
        if not options:
            raise InvalidSelectOptionsError()
        self._ensure_idle()

        options = list(options)
        output = f"{prompt}\r\n{render_select_options(options, 0)}"
        if on_change is not None:
            on_change(options[0].value)
        return await self._request(
            InputRequestType.SELECT,
            prompt,
            output,
            options=options,
            selected_index=0,
            on_change=on_change,
        )

    async def read_select_inline(
        self,
        prompt: str,
        options: Sequence[SelectOption],
        on_change: Callable[[str], None] | None = None,
    ) -> str | None:
        if not options:
            raise InvalidSelectOptionsError(
                "read_select_inline requires at least one option"
            )
        self._ensure_idle()

        options = list(options)
        output = f"{prompt} {render_inline_select_options(options, 0)}"
        if on_change is not None:
            on_change(options[0].value)
        return await self._request(
            InputRequestType.SELECT_INLINE,
            prompt,
            output,
            options=options,
            selected_index=0,
            on_change=on_change,
        )

    async def read_multi_select(
        self, prompt: str, options: Sequence[MultiSelectOption]
    ) -> list[str] | None:
        """
        Let the user tick any number of options.

        Space toggles the highlighted option and Enter submits. Options
        declared ``checked`` start ticked.

        Returns:
            Values of the ticked options in declaration order, or ``None``
            when cancelled.
        """
        if not options:
            raise InvalidSelectOptionsError(
                "read_multi_select requires at least one option"
            )
        self._ensure_idle()

        options = list(options)
        checked = {index for index, option in enumerate(options) if option.checked}
        output = f"{prompt}\r\n{render_multi_select_options(options, 0, checked)}"
        return await self._request(
            InputRequestType.MULTI_SELECT,
            prompt,
            output,
            options=options,
            selected_index=0,
            checked_indices=checked,
        )

    async def read_number(
        self, prompt: str, options: NumberOptions | None = None
    ) -> float | int | None:
        display_prompt = number_prompt(prompt, options)
        return await self._request(
            InputRequestType.NUMBER,
            display_prompt,
            display_prompt,
            number_options=options,
        )

    def _ensure_idle(self) -> None:
        if self._host.active_input_request is not None:
            raise InputRequestActiveError()

    async def _request(
        self,
        request_type: InputRequestType,
        prompt_text: str,
        output: str,
        **fields: Any,
    ) -> Any:
        self._ensure_idle()

        future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

        def _resolve(value: Any) -> None:
            if not future.done():
                future.set_result(value)

        self._host.write_to_terminal(output)
        self._host.set_active_input_request(
            InputRequest(
                type=request_type,
                prompt_text=prompt_text,
                resolve=_resolve,
                **fields,
            )
        )
        return await future
