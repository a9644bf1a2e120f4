"""Use case for building one archive through a process pipeline."""

from __future__ import annotations

import logging
import os
from enum import Enum

from tarpipe.application.config.archive_config import ArchiveConfig
from tarpipe.application.config.settings import Settings
from tarpipe.application.config.utilities import UtilityResolver
from tarpipe.application.dto.archive_build_result import ArchiveBuildResult
from tarpipe.application.dto.archive_descriptor import ArchiveDescriptor
from tarpipe.application.dto.archive_event import (
    ARCHIVE_COMPLETED,
    ARCHIVE_FAILED,
    ARCHIVE_STARTED,
    PARTIAL_READ,
)
from tarpipe.application.dto.archive_stage_plan import ArchiveStagePlan
from tarpipe.application.services.archive_command_builder import (
    TAR_FILES_CHANGED,
    ArchiveCommandBuilder,
)
from tarpipe.application.services.archive_directory_service import (
    ArchiveDirectoryService,
)
from tarpipe.application.services.archive_event_log import ArchiveEventLog
from tarpipe.application.services.pipeline_runner import PipelineRunner
from tarpipe.application.validators.archive_config_validator import (
    ArchiveConfigValidator,
)
from tarpipe.archive.path_set import PathSet
from tarpipe.compression.base import Compressor
from tarpipe.exceptions import (
    ArchiveConfigError,
    ArchivePipelineError,
    ArchiveStateError,
)

logger = logging.getLogger(__name__)


class ArchiveState(Enum):
    CONFIGURING = "configuring"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


class ArchiveBuilder:
    """Package a set of paths into ``<name>.tar[.ext...]`` for one trigger.

    A builder is single use. Paths and options may change only while it is
    CONFIGURING; ``perform`` moves it to RUNNING and then to COMPLETED or
    FAILED. On failure the output file may be left partially written and
    removing it is up to the caller.
    """

    def __init__(
        self,
        config: ArchiveConfig,
        trigger: str,
        settings: Settings | None = None,
        compressor: Compressor | None = None,
        events: ArchiveEventLog | None = None,
        pipeline_runner: PipelineRunner | None = None,
        command_builder: ArchiveCommandBuilder | None = None,
        validator: ArchiveConfigValidator | None = None,
    ) -> None:
        errors = (validator or ArchiveConfigValidator()).validate(config, trigger)
        if errors:
            raise ArchiveConfigError(errors)

        self._settings = settings or Settings.default()
        self._name = config.name
        self._trigger = trigger
        self._tar_options = config.tar_options
        self._allow_changed_files = config.allow_changed_files
        self._compressor = compressor
        self._events = events if events is not None else ArchiveEventLog()
        self._pipeline_runner = pipeline_runner or PipelineRunner()
        self._command_builder = command_builder or ArchiveCommandBuilder(
            UtilityResolver(self._settings.utilities)
        )
        self._directory_service = ArchiveDirectoryService(self._settings)
        self._state = ArchiveState.CONFIGURING
        self._result: ArchiveBuildResult | None = None

        self._path_set = PathSet(config.name, self._events)
        self._path_set.extend(config.includes, config.excludes)

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> ArchiveState:
        return self._state

    @property
    def includes(self) -> tuple[str, ...]:
        return self._path_set.includes

    @property
    def excludes(self) -> tuple[str, ...]:
        return self._path_set.excludes

    @property
    def events(self) -> ArchiveEventLog:
        return self._events

    @property
    def result(self) -> ArchiveBuildResult | None:
        return self._result

    def _require_configuring(self, action: str) -> None:
        if self._state is not ArchiveState.CONFIGURING:
            raise ArchiveStateError(
                f"Cannot {action} archive '{self._name}' while {self._state.value}."
            )

    def add(self, path: str | os.PathLike[str]) -> bool:
        """Add a path to package; missing paths are skipped with a warning."""
        self._require_configuring("add paths to")
        return self._path_set.add_include(path)

    def exclude(self, path: str | os.PathLike[str]) -> None:
        self._require_configuring("add excludes to")
        self._path_set.add_exclude(path)

    def tar_options(self, options: str) -> None:
        """Extra ``tar`` arguments, e.g. ``'-h --xattrs'``."""
        self._require_configuring("set tar options for")
        self._tar_options = options or ""

    def allow_changed_files(self, value: bool = True) -> None:
        """Accept ``tar`` exit status 1; a warning is still emitted."""
        self._require_configuring("change options of")
        self._allow_changed_files = value

    def descriptor(self) -> ArchiveDescriptor:
        """Descriptor of the uncompressed archive."""
        return ArchiveDescriptor(
            name=self._name,
            output_dir=self._settings.archive_dir(self._trigger),
            allow_partial_read=self._allow_changed_files,
        )

    def build_stages(self) -> ArchiveStagePlan:
        """Return the stages ``perform`` would run, without running them."""
        return self._command_builder.build(
            self.descriptor(),
            self._path_set,
            tar_options=self._tar_options,
            compressor=self._compressor,
        )

    def perform(self) -> ArchiveBuildResult:
        """Run the archive pipeline and write the archive file.

        Raises:
            ArchiveStateError: the builder already ran
            ArchivePipelineError: a stage exited with an unaccepted code or
                could not be started
        """
        self._require_configuring("perform")
        self._state = ArchiveState.RUNNING
        includes = self._path_set.includes
        self._events.emit(
            ARCHIVE_STARTED,
            self._name,
            "Archive has started archiving:\n"
            + "\n".join(f"  {path}" for path in includes),
            details={"paths": list(includes)},
        )

        try:
            self._directory_service.prepare(self._trigger)
            plan = self.build_stages()
            descriptor = plan.descriptor
            with descriptor.path.open("wb") as output:
                execution = self._pipeline_runner.run(plan.stages, output=output)
        except Exception as exc:
            self._state = ArchiveState.FAILED
            self._events.emit(
                ARCHIVE_FAILED,
                self._name,
                f"Failed to Create Backup Archive\n{exc}",
                level="error",
                details={"error": str(exc)},
            )
            raise

        if not execution.success:
            self._state = ArchiveState.FAILED
            diagnostics = execution.error_messages()
            self._events.emit(
                ARCHIVE_FAILED,
                self._name,
                "Failed to Create Backup Archive\n" + diagnostics,
                level="error",
                details={
                    "path": str(descriptor.path),
                    "failed_stages": [status.index for status in execution.failed_stages],
                },
            )
            raise ArchivePipelineError(diagnostics, result=execution, path=descriptor.path)

        archiver = execution.status_for(0)
        partial_read = (
            descriptor.allow_partial_read and archiver.exit_code == TAR_FILES_CHANGED
        )
        if partial_read:
            self._events.warning(
                PARTIAL_READ,
                self._name,
                "Archive may be incomplete because files changed during read.",
                stderr=archiver.stderr_text.strip(),
            )

        self._state = ArchiveState.COMPLETED
        self._result = ArchiveBuildResult(
            descriptor=descriptor,
            execution=execution,
            partial_read=partial_read,
        )
        self._events.emit(
            ARCHIVE_COMPLETED,
            self._name,
            f"Archive Complete! {descriptor.path}",
            details={"path": str(descriptor.path), "extension": descriptor.extension},
        )
        return self._result
