"""Tests for running connected subprocess stages."""

from __future__ import annotations

import pytest

from tarpipe.application.dto.command_stage import CommandStage
from tarpipe.application.services.pipeline_runner import (
    EXIT_NOT_EXECUTABLE,
    EXIT_NOT_FOUND,
    PipelineRunner,
)


class TestSuccessfulPipelines:
    """Stages that all exit with accepted codes."""

    def test_all_zero_exits_succeed_with_one_status_per_stage(self, py_stage):
        stages = [
            py_stage("print('hello')"),
            py_stage("import sys; sys.stdout.write(sys.stdin.read().upper())"),
            py_stage("import sys; sys.stdout.write(sys.stdin.read())"),
        ]

        result = PipelineRunner().run(stages)

        assert result.success
        assert len(result.statuses) == 3
        assert [status.exit_code for status in result.statuses] == [0, 0, 0]
        assert [status.index for status in result.statuses] == [0, 1, 2]
        assert result.output == b"HELLO\n"
        assert result.error_messages() == ""

    def test_first_stage_reads_empty_input(self, py_stage):
        result = PipelineRunner().run(
            [py_stage("import sys; print(len(sys.stdin.read()))")]
        )

        assert result.success
        assert result.output.strip() == b"0"

    def test_exit_code_in_accepted_set_is_success(self, py_stage):
        stages = [
            py_stage("import sys; print('data'); sys.exit(1)", accepted=(0, 1)),
            py_stage("import sys; sys.stdout.write(sys.stdin.read())"),
        ]

        result = PipelineRunner().run(stages)

        assert result.success
        assert result.statuses[0].exit_code == 1
        assert result.output == b"data\n"

    def test_output_written_to_file(self, py_stage, tmp_path):
        target = tmp_path / "out.bin"
        with target.open("wb") as handle:
            result = PipelineRunner().run(
                [
                    py_stage("import sys; sys.stdout.buffer.write(bytes(range(256)))"),
                    py_stage("import sys; sys.stdout.buffer.write(sys.stdin.buffer.read())"),
                ],
                output=handle,
            )

        assert result.success
        assert result.output == b""
        assert target.read_bytes() == bytes(range(256))

    def test_large_streams_do_not_deadlock(self, py_stage):
        producer = py_stage(
            "import sys\n"
            "sys.stderr.write('e' * (1024 * 1024))\n"
            "sys.stdout.buffer.write(b'x' * (5 * 1024 * 1024))\n"
        )
        consumer = py_stage(
            "import sys\n"
            "sys.stderr.write('w' * (512 * 1024))\n"
            "print(len(sys.stdin.buffer.read()))\n"
        )

        result = PipelineRunner().run([producer, consumer])

        assert result.success
        assert result.output.strip() == str(5 * 1024 * 1024).encode()
        assert len(result.statuses[0].stderr_text) == 1024 * 1024
        assert len(result.statuses[1].stderr_text) == 512 * 1024

    def test_stderr_lines_reported_with_stage_index(self, py_stage):
        seen: list[tuple[int, str]] = []
        stages = [
            py_stage("import sys; sys.stderr.write('first\\n'); print('x')"),
            py_stage("import sys; sys.stdin.read(); sys.stderr.write('second\\n')"),
        ]

        PipelineRunner().run(stages, on_stderr_line=lambda i, line: seen.append((i, line)))

        assert sorted(seen) == [(0, "first"), (1, "second")]


class TestFailingPipelines:
    """Stages with unaccepted exit codes or launch failures."""

    def test_unaccepted_exit_fails_and_labels_stage(self, py_stage):
        stages = [
            py_stage("print('payload')"),
            py_stage(
                "import sys; sys.stdin.read(); sys.stderr.write('boom happened\\n'); sys.exit(2)"
            ),
        ]

        result = PipelineRunner().run(stages)

        assert not result.success
        assert result.statuses[0].succeeded
        assert result.statuses[1].exit_code == 2
        assert [status.index for status in result.failed_stages] == [1]
        messages = result.error_messages()
        assert "stage 1" in messages
        assert "returned exit code 2" in messages
        assert "boom happened" in messages
        assert result.statuses[1].stderr_text == "boom happened\n"
        assert "stage 0" not in messages

    def test_error_messages_follow_stage_order(self, py_stage):
        stages = [
            py_stage("import sys; sys.stderr.write('early failure'); sys.exit(3)"),
            py_stage("import sys; sys.stdin.read(); print('ok')"),
            py_stage("import sys; sys.stdin.read(); sys.stderr.write('late failure'); sys.exit(4)"),
        ]

        result = PipelineRunner().run(stages)

        messages = result.error_messages()
        assert not result.success
        assert messages.index("stage 0") < messages.index("early failure")
        assert messages.index("early failure") < messages.index("stage 2")
        assert messages.index("stage 2") < messages.index("late failure")

    def test_exit_one_rejected_when_only_zero_accepted(self, py_stage):
        result = PipelineRunner().run([py_stage("import sys; sys.exit(1)")])

        assert not result.success
        assert result.statuses[0].exit_code == 1

    def test_launch_failure_is_reported_as_stage_failure(self, py_stage, tmp_path):
        missing = tmp_path / "no-such-tool"
        stages = [
            py_stage("print('x')"),
            CommandStage(program=str(missing)),
            py_stage("import sys; print(len(sys.stdin.read()))"),
        ]

        result = PipelineRunner().run(stages)

        assert not result.success
        assert len(result.statuses) == 3
        broken = result.statuses[1]
        assert not broken.launched
        assert broken.exit_code == EXIT_NOT_FOUND
        assert "Failed to launch" in broken.stderr_text
        assert result.statuses[2].succeeded
        assert result.output.strip() == b"0"
        assert "could not be started" in result.error_messages()

    def test_empty_pipeline_rejected(self):
        with pytest.raises(ValueError):
            PipelineRunner().run([])

    def test_non_executable_program_reports_not_executable(self, py_stage, tmp_path):
        plain_file = tmp_path / "not-a-program"
        plain_file.write_text("just data\n", encoding="utf-8")
        plain_file.chmod(0o644)

        result = PipelineRunner().run(
            [CommandStage(program=str(plain_file)), py_stage("print('after')")]
        )

        broken = result.statuses[0]
        assert broken.launched is False
        assert broken.exit_code == EXIT_NOT_EXECUTABLE
        assert result.statuses[1].succeeded
        assert not result.success

    def test_rejected_argument_does_not_orphan_started_stages(self, py_stage):
        stages = [
            py_stage("import time; time.sleep(0.2); print('done')"),
            CommandStage(program="cat", args=("a\0b",)),
        ]

        result = PipelineRunner().run(stages)

        assert len(result.statuses) == 2
        assert result.statuses[0].launched
        broken = result.statuses[1]
        assert broken.launched is False
        assert broken.exit_code == EXIT_NOT_EXECUTABLE
        assert "Failed to launch" in broken.stderr_text
        assert not result.success


def test_failing_stderr_callback_keeps_draining(py_stage):
    calls: list[int] = []

    def _broken_callback(index: int, line: str) -> None:
        calls.append(index)
        raise RuntimeError("reporter broke")

    stage = py_stage(
        "import sys\n"
        "for i in range(20000):\n"
        "    sys.stderr.write(f'line {i}\\n')\n"
    )

    result = PipelineRunner().run([stage], on_stderr_line=_broken_callback)

    assert result.success
    assert result.statuses[0].exit_code == 0
    assert result.statuses[0].stderr_text.count("\n") == 20000
    assert result.statuses[0].stderr_text.endswith("line 19999\n")
    assert len(calls) == 20000
