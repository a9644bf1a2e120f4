"""DTO naming the archive file a build produces."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

ARCHIVER_EXTENSION = "tar"


@dataclass(frozen=True)
class ArchiveDescriptor:
    """Name, location and extension chain of an archive."""

    name: str
    output_dir: Path
    extension: str = ARCHIVER_EXTENSION
    allow_partial_read: bool = False

    @property
    def filename(self) -> str:
        return f"{self.name}.{self.extension}"

    @property
    def path(self) -> Path:
        return self.output_dir / self.filename

    def with_suffix(self, suffix: str) -> "ArchiveDescriptor":
        """Return a copy whose extension gains one compressor suffix."""
        suffix = suffix.lstrip(".")
        if not suffix:
            return self
        return replace(self, extension=f"{self.extension}.{suffix}")
