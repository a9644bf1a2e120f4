"""DTO holding the stages prepared for one archive build."""

from __future__ import annotations

from dataclasses import dataclass

from tarpipe.application.dto.archive_descriptor import ArchiveDescriptor
from tarpipe.application.dto.command_stage import CommandStage


@dataclass(frozen=True)
class ArchiveStagePlan:
    """Ordered stages and the descriptor of the file they will write.

    The last stage copies its stdin to stdout; the caller connects that
    stdout to ``descriptor.path``.
    """

    stages: tuple[CommandStage, ...]
    descriptor: ArchiveDescriptor

    @property
    def archiver_stage(self) -> CommandStage:
        return self.stages[0]

    @property
    def command_lines(self) -> list[str]:
        return [stage.command_line for stage in self.stages]
