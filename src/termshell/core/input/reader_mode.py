"""
Input mode owning keystrokes while an interactive prompt is pending.
"""

from __future__ import annotations

import logging
from typing import Protocol

from termshell.core.constants import (
    ERASE_LINE,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_CTRL_C,
    KEY_ENTER,
    KEY_ESCAPE,
    RESET,
    ForegroundColor,
)
from termshell.core.domain.input_request import InputRequest, InputRequestType
from termshell.core.interfaces.input_mode_interface import IInputMode
from termshell.core.interfaces.terminal_interface import ITerminal
from termshell.core.services.input_reader import (
    render_inline_select_options,
    render_multi_select_options,
    render_select_options,
)

logger = logging.getLogger(__name__)


class ReaderModeHost(Protocol):
    terminal: ITerminal
    password_mask: str

    @property
    def active_input_request(self) -> InputRequest | None: ...

    def set_active_input_request(self, request: InputRequest | None) -> None: ...

    def pop_mode(self) -> IInputMode: ...


class ReaderMode(IInputMode):
    """
    Dispatches keystrokes to the active request by its type.

    Pushed when a prompt starts and popped when it resolves. Escape and
    Ctrl+C resolve any request with ``None``.
    """

    def __init__(self, host: ReaderModeHost) -> None:
        self.host = host

    async def handle_input(self, data: str) -> None:
        request = self.host.active_input_request
        if request is None:
            return

        if data in (KEY_CTRL_C, KEY_ESCAPE):
            logger.debug("Cancelled %s input request", request.type.value)
            self._finish(request, None)
            return

        if request.type == InputRequestType.LINE:
            self._handle_text(request, data, masked=False)
        elif request.type == InputRequestType.PASSWORD:
            self._handle_text(request, data, masked=True)
        elif request.type == InputRequestType.CONFIRM:
            self._handle_confirm(request, data)
        elif request.type == InputRequestType.SELECT:
            self._handle_select(request, data)
        elif request.type == InputRequestType.SELECT_INLINE:
            self._handle_select_inline(request, data)
        elif request.type == InputRequestType.MULTI_SELECT:
            self._handle_multi_select(request, data)
        elif request.type == InputRequestType.NUMBER:
            self._handle_number(request, data)

    def _finish(self, request: InputRequest, value: object, echo: str = "\r\n") -> None:
        self.host.terminal.write(echo)
        self.host.set_active_input_request(None)
        self.host.pop_mode()
        request.resolve(value)

    def _display(self, request: InputRequest, masked: bool) -> str:
        if masked:
            return self.host.password_mask * len(request.buffer)
        return request.buffer

    def _redraw_line(self, request: InputRequest, display_text: str) -> None:
        terminal = self.host.terminal
        terminal.write(ERASE_LINE)
        terminal.write(request.prompt_text + display_text)
        offset = len(request.buffer) - request.cursor_position
        if offset > 0:
            terminal.write(f"\x1b[{offset}D")

    def _insert(self, request: InputRequest, text: str) -> None:
        position = request.cursor_position
        request.buffer = request.buffer[:position] + text + request.buffer[position:]
        request.cursor_position += len(text)

    def _delete_before_cursor(self, request: InputRequest) -> bool:
        if request.cursor_position == 0:
            return False
        position = request.cursor_position
        request.buffer = request.buffer[: position - 1] + request.buffer[position:]
        request.cursor_position -= 1
        return True

    def _handle_text(self, request: InputRequest, data: str, masked: bool) -> None:
        if data == KEY_ENTER:
            self._finish(request, request.buffer)
        elif data == KEY_BACKSPACE:
            if self._delete_before_cursor(request):
                self._redraw_line(request, self._display(request, masked))
        elif data == KEY_ARROW_LEFT and not masked:
            if request.cursor_position > 0:
                request.cursor_position -= 1
                self.host.terminal.write(data)
        elif data == KEY_ARROW_RIGHT and not masked:
            if request.cursor_position < len(request.buffer):
                request.cursor_position += 1
                self.host.terminal.write(data)
        elif data.startswith(KEY_ESCAPE):
            return
        else:
            text = data.replace("\r", "").replace("\n", "")
            if not text:
                return
            self._insert(request, text)
            self._redraw_line(request, self._display(request, masked))

    def _handle_confirm(self, request: InputRequest, data: str) -> None:
        if data == KEY_ENTER:
            answer = request.buffer.lower()
            if answer == "y":
                value = True
            elif answer == "n":
                value = False
            else:
                value = bool(request.default_value)
            self._finish(request, value)
        elif data == KEY_BACKSPACE:
            if request.cursor_position > 0:
                request.buffer = request.buffer[:-1]
                request.cursor_position -= 1
                self._redraw_line(request, request.buffer)
        elif data.startswith(KEY_ESCAPE):
            return
        elif data.lower() in ("y", "n"):
            request.buffer = data
            request.cursor_position = 1
            self._redraw_line(request, request.buffer)

    def _handle_select(self, request: InputRequest, data: str) -> None:
        options = request.options
        if data == KEY_ENTER:
            self._finish(request, options[request.selected_index].value)
            return

        if data == KEY_ARROW_UP and request.selected_index > 0:
            request.selected_index -= 1
        elif data == KEY_ARROW_DOWN and request.selected_index < len(options) - 1:
            request.selected_index += 1
        else:
            return

        self._redraw_options(request)
        if request.on_change is not None:
            request.on_change(options[request.selected_index].value)

    def _redraw_options(self, request: InputRequest) -> None:
        self._rewrite_option_lines(
            request, render_select_options(request.options, request.selected_index)
        )

    def _rewrite_option_lines(self, request: InputRequest, rendered: str) -> None:
        terminal = self.host.terminal
        terminal.write(f"\x1b[{len(request.options)}A")
        for line in rendered.split("\r\n")[:-1]:
            terminal.write(f"{ERASE_LINE}{line}\r\n")

    def _handle_select_inline(self, request: InputRequest, data: str) -> None:
        options = request.options
        if data == KEY_ENTER:
            self._finish(request, options[request.selected_index].value)
            return

        if data == KEY_ARROW_LEFT and request.selected_index > 0:
            request.selected_index -= 1
        elif data == KEY_ARROW_RIGHT and request.selected_index < len(options) - 1:
            request.selected_index += 1
        else:
            return

        terminal = self.host.terminal
        terminal.write(ERASE_LINE)
        terminal.write(
            f"{request.prompt_text} "
            f"{render_inline_select_options(options, request.selected_index)}"
        )
        if request.on_change is not None:
            request.on_change(options[request.selected_index].value)

    def _handle_multi_select(self, request: InputRequest, data: str) -> None:
        options = request.options
        checked = request.checked_indices
        if data == KEY_ENTER:
            values = [o.value for i, o in enumerate(options) if i in checked]
            self._finish(request, values)
            return

        if data == " ":
            checked.symmetric_difference_update({request.selected_index})
        elif data == KEY_ARROW_UP and request.selected_index > 0:
            request.selected_index -= 1
        elif data == KEY_ARROW_DOWN and request.selected_index < len(options) - 1:
            request.selected_index += 1
        else:
            return

        self._rewrite_option_lines(
            request,
            render_multi_select_options(options, request.selected_index, checked),
        )

    def _handle_number(self, request: InputRequest, data: str) -> None:
        if data == KEY_ENTER:
            self._submit_number(request)
        elif data == KEY_BACKSPACE:
            if self._delete_before_cursor(request):
                self._redraw_line(request, request.buffer)
        elif data == "-":
            if request.cursor_position == 0 and "-" not in request.buffer:
                request.buffer = "-" + request.buffer
                request.cursor_position = 1
                self._redraw_line(request, request.buffer)
        elif data == ".":
            if "." not in request.buffer:
                self._insert(request, data)
                self._redraw_line(request, request.buffer)
        elif len(data) == 1 and data.isdigit():
            self._insert(request, data)
            self._redraw_line(request, request.buffer)

    def _submit_number(self, request: InputRequest) -> None:
        options = request.number_options
        if request.buffer == "":
            if options is not None and options.default is not None:
                self._finish(request, options.default)
            else:
                self._reject_number(request, "Please enter a number.")
            return

        try:
            value: int | float = (
                float(request.buffer) if "." in request.buffer else int(request.buffer)
            )
        except ValueError:
            self._reject_number(request, "Invalid number.")
            return

        if options is not None and options.minimum is not None and value < options.minimum:
            self._reject_number(request, f"Value must be at least {options.minimum}.")
        elif options is not None and options.maximum is not None and value > options.maximum:
            self._reject_number(request, f"Value must be at most {options.maximum}.")
        else:
            self._finish(request, value)

    def _reject_number(self, request: InputRequest, message: str) -> None:
        terminal = self.host.terminal
        terminal.write("\r\n")
        terminal.write(f"{ForegroundColor.RED.value}{message}{RESET}\r\n")
        request.buffer = ""
        request.cursor_position = 0
        terminal.write(request.prompt_text)
