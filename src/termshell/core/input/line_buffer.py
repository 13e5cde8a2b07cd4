"""
Editable text buffer with a cursor.
"""


class LineBuffer:
    """The command line being edited; the cursor is clamped to the text."""

    def __init__(self) -> None:
        self._text = ""
        self._cursor_position = 0

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor_position(self) -> int:
        return self._cursor_position

    @cursor_position.setter
    def cursor_position(self, value: int) -> None:
        self._cursor_position = max(0, min(value, len(self._text)))

    def insert(self, text: str) -> None:
        position = self._cursor_position
        self._text = self._text[:position] + text + self._text[position:]
        self._cursor_position += len(text)

    def delete_char_before(self) -> None:
        if self._cursor_position > 0:
            position = self._cursor_position
            self._text = self._text[: position - 1] + self._text[position:]
            self._cursor_position -= 1

    def delete_char_at(self) -> None:
        if self._cursor_position < len(self._text):
            position = self._cursor_position
            self._text = self._text[:position] + self._text[position + 1 :]

    def move_cursor_left(self) -> None:
        if self._cursor_position > 0:
            self._cursor_position -= 1

    def move_cursor_right(self) -> None:
        if self._cursor_position < len(self._text):
            self._cursor_position += 1

    def move_home(self) -> None:
        self._cursor_position = 0

    def move_end(self) -> None:
        self._cursor_position = len(self._text)

    def clear(self) -> None:
        self._text = ""
        self._cursor_position = 0

    def set_text(self, text: str) -> None:
        self._text = text
        self._cursor_position = len(text)
