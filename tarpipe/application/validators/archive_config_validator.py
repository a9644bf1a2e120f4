"""Validation rules for archive configuration."""

from __future__ import annotations

from pathlib import PurePath

from tarpipe.application.config.archive_config import ArchiveConfig


class ArchiveConfigValidator:
    """Applies configuration-level validation before a build is set up."""

    def safe_name(self, raw_name: str | None) -> str | None:
        """Return the name if it is usable as a single file name component."""
        if not raw_name or not raw_name.strip():
            return None
        if raw_name in {".", ".."}:
            return None
        if "/" in raw_name or "\\" in raw_name or "\0" in raw_name:
            return None
        if len(PurePath(raw_name).parts) != 1:
            return None
        return raw_name

    def validate(self, config: ArchiveConfig, trigger: str) -> list[str]:
        """Return a list of problems; empty when the config is usable."""
        errors: list[str] = []
        if self.safe_name(config.name) is None:
            errors.append(f"Archive name is not a valid file name: {config.name!r}")
        if self.safe_name(trigger) is None:
            errors.append(f"Trigger is not a valid directory name: {trigger!r}")
        return errors
