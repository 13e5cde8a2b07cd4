"""Shared constants: control characters, escape sequences and defaults."""

from enum import Enum

# Control characters recognised by the input modes
KEY_ENTER = "\r"
KEY_BACKSPACE = "\x7f"
KEY_ESCAPE = "\x1b"
KEY_CTRL_C = "\x03"
KEY_CTRL_D = "\x04"
KEY_TAB = "\t"
KEY_ARROW_UP = "\x1b[A"
KEY_ARROW_DOWN = "\x1b[B"
KEY_ARROW_RIGHT = "\x1b[C"
KEY_ARROW_LEFT = "\x1b[D"

# Terminal control sequences
ERASE_LINE = "\x1b[2K\r"
CLEAR_SCREEN = "\x1b[2J\x1b[H"
RESET = "\x1b[0m"

DEFAULT_PROMPT = "~$ "
DEFAULT_PASSWORD_MASK = "*"
DEFAULT_COLUMNS = 80
DEFAULT_PROCESSOR_VERSION = "1.0.0"

# Service container keys
FILE_SYSTEM_SERVICE = "file-system"
COMMAND_HISTORY_SERVICE = "command-history"
USER_ALIASES_SERVICE = "user-aliases"

# Completion provider priorities (ascending = queried first)
FILE_PATH_COMPLETION_PRIORITY = 50
COMMAND_COMPLETION_PRIORITY = 100
PARAMETER_COMPLETION_PRIORITY = 200


class ForegroundColor(str, Enum):
    """ANSI foreground colours available to writers."""

    BLACK = "\x1b[30m"
    RED = "\x1b[31m"
    GREEN = "\x1b[32m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    MAGENTA = "\x1b[35m"
    CYAN = "\x1b[36m"
    WHITE = "\x1b[37m"


class BackgroundColor(str, Enum):
    """ANSI background colours available to writers."""

    BLACK = "\x1b[40m"
    RED = "\x1b[41m"
    GREEN = "\x1b[42m"
    YELLOW = "\x1b[43m"
    BLUE = "\x1b[44m"
    MAGENTA = "\x1b[45m"
    CYAN = "\x1b[46m"
    WHITE = "\x1b[47m"
