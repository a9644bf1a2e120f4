"""Service for executing a chain of connected subprocesses."""

from __future__ import annotations

import logging
import subprocess
import threading
from pathlib import Path
from typing import IO, Callable, Sequence

from tarpipe.application.dto.command_stage import CommandStage
from tarpipe.application.dto.pipeline_execution_result import PipelineExecutionResult
from tarpipe.application.dto.stage_status import StageStatus

logger = logging.getLogger(__name__)

# Shell conventions for commands that could not be executed.
EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126

_READ_CHUNK = 64 * 1024

StderrLineCallback = Callable[[int, str], None]


def _decode(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode("utf-8", errors="replace")


class PipelineRunner:
    """Run stages as ``stage0 | stage1 | ... | stageN`` and collect results.

    Every stage is started before any of them is waited on. Each stderr
    stream gets its own reader thread so diagnostics never block the data
    flowing between stages.
    """

    def __init__(self, cwd: Path | None = None) -> None:
        self._cwd = cwd

    def run(
        self,
        stages: Sequence[CommandStage],
        output: IO[bytes] | None = None,
        on_stderr_line: StderrLineCallback | None = None,
    ) -> PipelineExecutionResult:
        """Execute the stages and wait for all of them to terminate.

        Args:
            stages: Non-empty, ordered list of stages
            output: Binary file receiving the last stage's stdout. When
                None the output is collected into ``result.output``.
            on_stderr_line: Called with ``(stage_index, line)`` for every
                stderr line, from reader threads.
        """
        stages = list(stages)
        if not stages:
            raise ValueError("A pipeline requires at least one stage.")

        last_index = len(stages) - 1
        processes: list[subprocess.Popen | None] = []
        launch_errors: dict[int, Exception] = {}
        stderr_chunks: list[list[bytes]] = [[] for _ in stages]
        output_chunks: list[bytes] = []
        readers: list[threading.Thread] = []

        def _stderr_reader(index: int, stream: IO[bytes]) -> None:
            callback_failed = False
            try:
                for line in iter(stream.readline, b""):
                    stderr_chunks[index].append(line)
                    text = line.decode("utf-8", errors="replace").rstrip("\n")
                    logger.debug(f"[stage {index}] {text}")
                    if on_stderr_line:
                        # The stream must keep draining even if reporting breaks.
                        try:
                            on_stderr_line(index, text)
                        except Exception:
                            if not callback_failed:
                                logger.exception(
                                    f"stderr callback failed for stage {index}"
                                )
                            callback_failed = True
            finally:
                stream.close()

        def _output_reader(stream: IO[bytes]) -> None:
            try:
                for chunk in iter(lambda: stream.read(_READ_CHUNK), b""):
                    output_chunks.append(chunk)
            finally:
                stream.close()

        logger.info(
            "Starting pipeline: "
            + " | ".join(stage.command_line for stage in stages)
        )

        upstream: IO[bytes] | None = None
        for index, stage in enumerate(stages):
            stdin = upstream if upstream is not None else subprocess.DEVNULL
            if index == last_index:
                stdout = output if output is not None else subprocess.PIPE
            else:
                stdout = subprocess.PIPE

            process: subprocess.Popen | None
            try:
                process = subprocess.Popen(
                    stage.argv,
                    cwd=str(self._cwd) if self._cwd else None,
                    stdin=stdin,
                    stdout=stdout,
                    stderr=subprocess.PIPE,
                )
            except (OSError, ValueError) as exc:
                # ValueError covers arguments Popen refuses, e.g. embedded NUL.
                process = None
                launch_errors[index] = exc
                logger.error(f"Failed to start stage {index} ({stage.command_line}): {exc}")
            finally:
                # The child holds its own copy; ours must go so the producer
                # sees a broken pipe once the consumer exits.
                if upstream is not None:
                    upstream.close()
                upstream = None
            processes.append(process)
            if process is None:
                continue

            if process.stderr is None:
                raise RuntimeError("Failed to attach to pipeline error streams.")
            reader = threading.Thread(
                target=_stderr_reader,
                args=(index, process.stderr),
                daemon=True,
            )
            reader.start()
            readers.append(reader)

            if index < last_index:
                upstream = process.stdout
            elif output is None and process.stdout is not None:
                output_thread = threading.Thread(
                    target=_output_reader,
                    args=(process.stdout,),
                    daemon=True,
                )
                output_thread.start()
                readers.append(output_thread)

        exit_codes: list[int | None] = []
        for process in processes:
            exit_codes.append(process.wait() if process is not None else None)
        for reader in readers:
            reader.join()

        statuses: list[StageStatus] = []
        for index, stage in enumerate(stages):
            exit_code = exit_codes[index]
            if exit_code is None:
                exc = launch_errors[index]
                statuses.append(
                    StageStatus(
                        index=index,
                        command_line=stage.command_line,
                        exit_code=(
                            EXIT_NOT_FOUND
                            if isinstance(exc, FileNotFoundError)
                            else EXIT_NOT_EXECUTABLE
                        ),
                        stderr_text=f"Failed to launch: {exc}",
                        accepted_exit_codes=stage.accepted_exit_codes,
                        launched=False,
                    )
                )
                continue
            statuses.append(
                StageStatus(
                    index=index,
                    command_line=stage.command_line,
                    exit_code=exit_code,
                    stderr_text=_decode(stderr_chunks[index]),
                    accepted_exit_codes=stage.accepted_exit_codes,
                )
            )

        result = PipelineExecutionResult(
            statuses=tuple(statuses),
            output=b"".join(output_chunks),
        )
        if result.success:
            logger.info(f"Pipeline finished: {len(statuses)} stage(s) succeeded")
        else:
            failed = ", ".join(str(status.index) for status in result.failed_stages)
            logger.warning(f"Pipeline failed at stage(s): {failed}")
        return result
