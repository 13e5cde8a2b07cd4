"""
Logging utilities for the shell.

This module provides utilities for logging, including:
- Test/production environment tagging
- Structured (structlog) loggers routed through the standard library
- Redaction of sensitive flag values in logged command lines
"""

import logging
import os
import re
import sys
from typing import Literal

import structlog


# Environment detection
def _is_running_under_pytest() -> bool:
    """Detect if we're running under pytest.

    Returns:
        True if running under pytest, False otherwise
    """
    return "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST") is not None


def _get_environment_tag() -> str:
    """Get the environment tag for logging.

    Returns:
        'test' if running under pytest, 'prod' otherwise
    """
    return "test" if _is_running_under_pytest() else "prod"


class EnvironmentTaggingFilter(logging.Filter):
    """Logging filter that adds environment tags to log records."""

    def __init__(self) -> None:
        super().__init__()
        self._env_tag = _get_environment_tag()

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        record.env_tag = self._env_tag
        return True


class EnvironmentTaggingFormatter(logging.Formatter):
    """Logging formatter that includes environment tags."""

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        style: Literal["%", "{", "$"] = "%",
    ) -> None:
        if fmt is None:
            fmt = "%(asctime)s [%(levelname)-8s] [%(env_tag)s] %(name)s:%(lineno)d %(message)s"
        super().__init__(fmt, datefmt, style=style)


# Flags whose values never reach the log output
DEFAULT_REDACTED_FLAGS = {
    "password",
    "passwd",
    "secret",
    "token",
    "api-key",
    "api_key",
}

_FLAG_VALUE_PATTERN = re.compile(
    r"(--?(?P<name>[A-Za-z0-9_-]+)(?:=|\s+))(?P<value>\"[^\"]*\"|'[^']*'|\S+)"
)


def redact_command_line(
    line: str,
    redacted_flags: set[str] | None = None,
    mask: str = "***",
) -> str:
    """Mask the values of sensitive flags in a raw command line.

    Args:
        line: The raw command line
        redacted_flags: Flag names to mask (defaults to DEFAULT_REDACTED_FLAGS)
        mask: The mask to use

    Returns:
        The command line with sensitive values replaced
    """
    flags = redacted_flags or DEFAULT_REDACTED_FLAGS

    def _replace(match: re.Match[str]) -> str:
        if match.group("name").lower() in flags:
            return f"{match.group(1)}{mask}"
        return match.group(0)

    return _FLAG_VALUE_PATTERN.sub(_replace, line)


def configure_structlog() -> None:
    """Route structlog events through the standard logging handlers."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.format_exc_info,
            structlog.processors.KeyValueRenderer(
                key_order=["event"], drop_missing=True
            ),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger.

    Args:
        name: Optional logger name

    Returns:
        A structured logger
    """
    if not structlog.is_configured():
        configure_structlog()
    return structlog.get_logger(name)  # type: ignore


def install_environment_tagging() -> None:
    """Install environment tagging filter on the root logger and its handlers."""
    root = logging.getLogger()
    filter_instance = EnvironmentTaggingFilter()
    root.addFilter(filter_instance)

    for handler in list(root.handlers):
        handler.addFilter(filter_instance)
        if isinstance(handler.formatter, logging.Formatter) and not isinstance(
            handler.formatter, EnvironmentTaggingFormatter
        ):
            handler.setFormatter(
                EnvironmentTaggingFormatter(
                    fmt=handler.formatter._fmt, datefmt=handler.formatter.datefmt
                )
            )


def configure_logging_with_environment_tagging(
    level: int = logging.INFO,
    log_format: str | None = None,
    log_file: str | None = None,
) -> None:
    """Configure logging with environment tagging.

    Log lines go to stderr, or only to ``log_file`` when one is given so
    they never interleave with the interactive prompt.

    Args:
        level: Logging level
        log_format: Optional log format string
        log_file: Optional log file path
    """
    if log_format is None:
        log_format = "%(asctime)s [%(levelname)-8s] [%(env_tag)s] %(name)s:%(lineno)d %(message)s"

    formatter = EnvironmentTaggingFormatter(fmt=log_format)

    handlers: list[logging.Handler] = []
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)
    else:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True,
    )

    install_environment_tagging()
    configure_structlog()
