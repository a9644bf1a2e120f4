from __future__ import annotations

"""DTO capturing the outcome of a pipeline run."""

from dataclasses import dataclass

from tarpipe.application.dto.stage_status import StageStatus


@dataclass(frozen=True)
class PipelineExecutionResult:
    """Per-stage statuses and any output captured from the last stage."""

    statuses: tuple[StageStatus, ...]
    output: bytes = b""

    @property
    def success(self) -> bool:
        """True when every stage exited with one of its accepted codes."""
        return all(status.succeeded for status in self.statuses)

    @property
    def failed_stages(self) -> list[StageStatus]:
        return [status for status in self.statuses if not status.succeeded]

    def status_for(self, index: int) -> StageStatus:
        return self.statuses[index]

    def error_messages(self) -> str:
        """Stage-labelled stderr of every failed stage, in stage order."""
        sections: list[str] = []
        for status in self.failed_stages:
            if status.launched:
                header = f"{status.label} returned exit code {status.exit_code}"
            else:
                header = f"{status.label} could not be started"
            stderr_text = status.stderr_text.strip()
            sections.append(
                f"[{header}]\n{stderr_text}" if stderr_text else f"[{header}]"
            )
        return "\n".join(sections)
