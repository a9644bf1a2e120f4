"""Build tar archives through chained archiver and compressor processes.

- application.services.pipeline_runner: runs connected subprocess stages
- application.use_cases.build_archive: ArchiveBuilder orchestration
- archive: include/exclude path handling
- compression: compressor passes appended to the pipeline
"""

from .application.config.archive_config import ArchiveConfig
from .application.config.settings import Settings
from .application.dto.command_stage import CommandStage
from .application.services.pipeline_runner import PipelineRunner
from .application.use_cases.build_archive import ArchiveBuilder, ArchiveState
from .exceptions import ArchivePipelineError

__version__ = "0.1.0"

__all__ = [
    "ArchiveBuilder",
    "ArchiveConfig",
    "ArchivePipelineError",
    "ArchiveState",
    "CommandStage",
    "PipelineRunner",
    "Settings",
]
