"""
Base input mode: line editing, history navigation and tab completion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from termshell.core.constants import (
    DEFAULT_COLUMNS,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_CTRL_C,
    KEY_CTRL_D,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_TAB,
)
from termshell.core.domain.completion import CompletionAction, CompletionResult
from termshell.core.interfaces.input_mode_interface import IInputMode

if TYPE_CHECKING:
    from termshell.core.context.execution_context import ShellContext


def format_candidate_columns(candidates: list[str], width: int) -> list[str]:
    """Lay candidates out in columns padded to the longest one plus two."""
    column_width = max(len(candidate) for candidate in candidates) + 2
    per_row = max(1, width // column_width)
    rows: list[str] = []
    for start in range(0, len(candidates), per_row):
        chunk = candidates[start : start + per_row]
        rows.append("".join(candidate.ljust(column_width) for candidate in chunk))
    return rows


class CommandLineMode(IInputMode):
    """Owns keystrokes whenever no interactive prompt is pending."""

    def __init__(self, shell: ShellContext) -> None:
        self.shell = shell
        self.history_index = 0

    def activate(self) -> None:
        self.history_index = self.shell.history.last_index

    async def handle_input(self, data: str) -> None:
        shell = self.shell

        if data == KEY_CTRL_C:
            self._handle_ctrl_c()
            return
        if data == KEY_ESCAPE:
            shell.abort()
            if not shell.is_command_running:
                shell.show_prompt(new_line=True)
            return
        if shell.is_command_running:
            return

        if data == KEY_CTRL_D:
            if not shell.line_buffer.text:
                shell.terminal.write("\r\n")
                shell.request_exit()
            return
        if data == KEY_TAB:
            await self._handle_tab_completion()
            return

        shell.completion_engine.reset_state()
        buffer = shell.line_buffer

        if data == KEY_ENTER:
            self._handle_enter()
        elif data == KEY_ARROW_UP:
            self._show_previous_command()
        elif data == KEY_ARROW_DOWN:
            self._show_next_command()
        elif data == KEY_ARROW_LEFT:
            if buffer.cursor_position > 0:
                buffer.move_cursor_left()
                shell.terminal.write(data)
        elif data == KEY_ARROW_RIGHT:
            if buffer.cursor_position < len(buffer.text):
                buffer.move_cursor_right()
                shell.terminal.write(data)
        elif data == KEY_BACKSPACE:
            if buffer.cursor_position > 0:
                buffer.delete_char_before()
                shell.refresh_line()
        elif data.startswith(KEY_ESCAPE):
            return
        else:
            text = data.replace("\r", "").replace("\n", "").replace("\t", "")
            if text:
                buffer.insert(text)
                shell.refresh_line()

    def _handle_ctrl_c(self) -> None:
        shell = self.shell
        shell.abort()
        shell.terminal.writeln("^C")
        if not shell.is_command_running:
            shell.show_prompt()

    def _handle_enter(self) -> None:
        shell = self.shell
        line = shell.line_buffer.text
        shell.terminal.write("\r\n")

        if not line.strip():
            shell.show_prompt()
            return

        shell.history.add_command(line)
        self.history_index = shell.history.last_index
        shell.line_buffer.clear()
        shell.start_command(line)

    async def _handle_tab_completion(self) -> None:
        shell = self.shell
        buffer = shell.line_buffer
        result = await shell.completion_engine.complete(buffer.text, buffer.cursor_position)

        if result.action == CompletionAction.COMPLETE:
            self._apply_completion(result)
        elif result.action == CompletionAction.SHOW_CANDIDATES and result.candidates:
            width = shell.terminal.cols or DEFAULT_COLUMNS
            shell.terminal.write("\r\n")
            for row in format_candidate_columns(result.candidates, width):
                shell.terminal.write(row + "\r\n")
            shell.show_prompt(keep_buffer=True)
            offset = len(buffer.text) - buffer.cursor_position
            if offset > 0:
                shell.terminal.write(f"\x1b[{offset}D")

    def _apply_completion(self, result: CompletionResult) -> None:
        if result.replacement is None or result.token_start is None or result.token is None:
            return
        buffer = self.shell.line_buffer
        before = buffer.text[: result.token_start]
        after = buffer.text[result.token_start + len(result.token) :]
        suffix = (
            " "
            if not after and not result.partial and not result.replacement.endswith("/")
            else ""
        )
        buffer.set_text(before + result.replacement + suffix + after)
        buffer.cursor_position = result.token_start + len(result.replacement) + len(suffix)
        self.shell.refresh_line()

    def _show_previous_command(self) -> None:
        if self.history_index > 0:
            self.history_index -= 1
            self._display_history_entry()

    def _show_next_command(self) -> None:
        history = self.shell.history
        if self.history_index < history.last_index - 1:
            self.history_index += 1
            self._display_history_entry()
        else:
            self.history_index = history.last_index
            self.shell.line_buffer.clear()
            self.shell.refresh_line()

    def _display_history_entry(self) -> None:
        command = self.shell.history.get_command(self.history_index) or ""
        self.shell.line_buffer.set_text(command)
        self.shell.refresh_line()
