"""Exceptions raised by archive building and pipeline execution."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tarpipe.application.dto.pipeline_execution_result import (
        PipelineExecutionResult,
    )


class TarpipeError(RuntimeError):
    """Base class for all tarpipe errors."""
    pass


class InvalidStageError(TarpipeError, ValueError):
    """Raised when a command stage is constructed with invalid data."""
    pass


class ArchiveConfigError(TarpipeError, ValueError):
    """Raised when an archive configuration fails validation."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("Invalid archive configuration:\n" + "\n".join(self.errors))


class ArchiveStateError(TarpipeError):
    """Raised when an archive builder is used outside its allowed state."""
    pass


class ArchivePipelineError(TarpipeError):
    """Raised when any stage of an archive pipeline fails.

    The output file named by ``path`` may exist in a partially written
    form. It is not removed here.
    """

    def __init__(
        self,
        diagnostics: str,
        result: PipelineExecutionResult | None = None,
        path: Path | None = None,
    ) -> None:
        self.diagnostics = diagnostics
        self.result = result
        self.path = path
        super().__init__("Failed to Create Backup Archive\n" + diagnostics)
