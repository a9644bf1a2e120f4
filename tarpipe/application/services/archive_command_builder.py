"""Service for constructing the stages of an archive pipeline."""

from __future__ import annotations

import shlex

from tarpipe.application.config.utilities import UtilityResolver
from tarpipe.application.dto.archive_descriptor import ArchiveDescriptor
from tarpipe.application.dto.archive_stage_plan import ArchiveStagePlan
from tarpipe.application.dto.command_stage import CommandStage
from tarpipe.archive.path_set import PathSet
from tarpipe.compression.base import Compressor

# tar exits 1 when a file changed while it was being read.
TAR_FILES_CHANGED = 1


class ArchiveCommandBuilder:
    """Builds ``tar | [compressors...] | cat`` for an archive."""

    def __init__(self, utilities: UtilityResolver | None = None) -> None:
        self._utilities = utilities or UtilityResolver()

    def build(
        self,
        descriptor: ArchiveDescriptor,
        path_set: PathSet,
        tar_options: str = "",
        compressor: Compressor | None = None,
    ) -> ArchiveStagePlan:
        """Translate archive settings into an ordered stage list."""
        accepted = {0, TAR_FILES_CHANGED} if descriptor.allow_partial_read else {0}
        stages = [
            CommandStage(
                program=self._utilities.utility("tar"),
                args=(
                    *shlex.split(tar_options or ""),
                    "-cPf",
                    "-",
                    *path_set.render_excludes(),
                    *path_set.render_includes(),
                ),
                accepted_exit_codes=frozenset(accepted),
            )
        ]

        def _add_pass(argv: list[str], extension: str) -> None:
            nonlocal descriptor
            stages.append(CommandStage.from_argv(argv, accepted_exit_codes=(0,)))
            descriptor = descriptor.with_suffix(extension)

        if compressor is not None:
            compressor.compress_with(_add_pass)

        stages.append(CommandStage(program=self._utilities.utility("cat")))
        return ArchiveStagePlan(stages=tuple(stages), descriptor=descriptor)
