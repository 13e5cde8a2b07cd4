"""
Tests for the per-command process lifecycle.
"""

import pytest
from termshell.core.common.exceptions import ProcessExitedError
from termshell.core.context.execution_process import ExecutionProcess


def test_end_without_exit_code_succeeds() -> None:
    process = ExecutionProcess()
    process.start()
    assert process.running
    assert process.exit_code is None
    assert process.succeeded

    process.end()

    assert not process.running
    assert process.exit_code == 0
    assert process.succeeded


def test_exit_unwinds_unless_silent() -> None:
    process = ExecutionProcess()
    process.start()

    with pytest.raises(ProcessExitedError) as exc_info:
        process.exit(3)

    assert exc_info.value.code == 3
    assert process.exited
    assert not process.succeeded

    process.start()
    process.exit(-1, silent=True)
    process.end()
    assert process.exit_code == -1


def test_start_resets_output() -> None:
    process = ExecutionProcess()
    process.output({"a": 1})
    assert process.output_called
    assert process.data == {"a": 1}

    process.start()

    assert process.data is None
    assert not process.output_called
