"""Service for preparing archive staging directories."""

from __future__ import annotations

from pathlib import Path

from tarpipe.application.config.settings import Settings


class ArchiveDirectoryService:
    """Create the per-trigger archive directory."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings

    def prepare(self, trigger: str) -> Path:
        """Create ``<tmp_path>/<trigger>/archives`` if needed and return it."""
        archive_dir = self._settings.archive_dir(trigger)
        archive_dir.mkdir(parents=True, exist_ok=True)
        return archive_dir
