"""Runtime settings for archive builds.

Archives are staged under a temporary-storage root, one directory per
trigger (the owner of the archive):

    <tmp_path>/<trigger>/archives/<name>.<ext>

The root defaults to ``~/.tarpipe/tmp`` and can be moved with the
``TARPIPE_TMP_PATH`` environment variable.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping

TMP_PATH_ENV = "TARPIPE_TMP_PATH"


def default_tmp_path() -> Path:
    """Return the default staging root under the user's home directory."""
    return Path.home() / ".tarpipe" / "tmp"


@dataclass(frozen=True)
class Settings:
    """Resolved staging root and utility overrides."""

    tmp_path: Path
    utilities: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tmp_path", Path(self.tmp_path).expanduser())
        object.__setattr__(self, "utilities", dict(self.utilities))

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "Settings":
        """Build settings from an environment mapping."""
        raw = environ.get(TMP_PATH_ENV, "").strip()
        tmp_path = Path(raw) if raw else default_tmp_path()
        return cls(tmp_path=tmp_path)

    @classmethod
    def default(cls) -> "Settings":
        """Create Settings from the process environment."""
        return cls.from_environ(os.environ)

    def archive_dir(self, trigger: str) -> Path:
        """Directory holding the archives of one trigger."""
        return self.tmp_path / trigger / "archives"
