"""DTO for a successfully built archive."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from tarpipe.application.dto.archive_descriptor import ArchiveDescriptor
from tarpipe.application.dto.pipeline_execution_result import (
    PipelineExecutionResult,
)


@dataclass(frozen=True)
class ArchiveBuildResult:
    """The written archive and how the pipeline ended."""

    descriptor: ArchiveDescriptor
    execution: PipelineExecutionResult
    partial_read: bool = False

    @property
    def path(self) -> Path:
        return self.descriptor.path

    @property
    def extension(self) -> str:
        return self.descriptor.extension
