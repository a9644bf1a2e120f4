from __future__ import annotations

import shlex

import pytest

from tarpipe.application.dto.command_stage import CommandStage
from tarpipe.application.dto.pipeline_execution_result import PipelineExecutionResult
from tarpipe.application.dto.stage_status import StageStatus
from tarpipe.exceptions import InvalidStageError


def test_empty_accepted_exit_codes_rejected():
    with pytest.raises(InvalidStageError):
        CommandStage(program="tar", accepted_exit_codes=frozenset())


def test_empty_program_rejected():
    with pytest.raises(InvalidStageError):
        CommandStage(program="")
    with pytest.raises(InvalidStageError):
        CommandStage.from_argv([])


def test_stages_compare_structurally():
    first = CommandStage.from_argv(["gzip", "-9"], accepted_exit_codes=[0])
    second = CommandStage(program="gzip", args=("-9",), accepted_exit_codes=frozenset({0}))

    assert first == second
    assert first.argv == ["gzip", "-9"]
    assert first.accepts(0)
    assert not first.accepts(1)


def test_command_line_quotes_each_argument():
    stage = CommandStage(program="tar", args=("-cPf", "-", "/data/it's here"))

    assert shlex.split(stage.command_line) == ["tar", "-cPf", "-", "/data/it's here"]


def test_result_error_messages_empty_on_success():
    status = StageStatus(0, "true", 0, "noise", frozenset({0}))
    result = PipelineExecutionResult(statuses=(status,))

    assert result.success
    assert result.failed_stages == []
    assert result.error_messages() == ""


def test_launch_failure_never_succeeds_even_with_accepted_code():
    status = StageStatus(0, "tool", 0, "missing", frozenset({0}), launched=False)

    assert not status.succeeded
    assert status.label == "stage 0 (tool)"
