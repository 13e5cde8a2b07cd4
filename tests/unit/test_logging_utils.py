"""
Tests for logging helpers.
"""

import logging

import pytest
from termshell.core.common.logging_utils import (
    EnvironmentTaggingFilter,
    EnvironmentTaggingFormatter,
    get_logger,
    redact_command_line,
)


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("login --password hunter2 --user bob", "login --password *** --user bob"),
        ("login --token='a b c'", "login --token=***"),
        ('connect --API-KEY "k 1" -v', "connect --API-KEY *** -v"),
        ("echo --name value", "echo --name value"),
        ("hash sha256 secret", "hash sha256 secret"),
    ],
)
def test_redact_command_line(line: str, expected: str) -> None:
    assert redact_command_line(line) == expected


def test_redact_custom_flags() -> None:
    assert redact_command_line("run --pin 1234", {"pin"}, mask="#") == "run --pin #"


def test_environment_tag_under_pytest() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    assert EnvironmentTaggingFilter().filter(record) is True
    assert record.env_tag == "test"  # type: ignore[attr-defined]
    assert "[test]" in EnvironmentTaggingFormatter().format(record)


def test_get_logger_returns_structured_logger() -> None:
    log = get_logger("termshell.test")
    assert hasattr(log, "info")
    assert hasattr(log, "bind")
