"""Include and exclude paths for one archive."""

from __future__ import annotations

import os
from typing import Iterable

from tarpipe.application.dto.archive_event import PATH_NOT_FOUND
from tarpipe.application.services.archive_event_log import ArchiveEventLog


def normalize_path(path: str | os.PathLike[str]) -> str:
    """Expand ``~`` and make the path absolute without resolving symlinks."""
    return os.path.abspath(os.path.expanduser(os.fspath(path)))


class PathSet:
    """Ordered include paths (validated) and exclude paths (normalized only).

    Includes that do not exist when added are omitted with a warning event.
    Excludes are never checked since ``tar`` may match them as patterns.
    """

    def __init__(self, archive_name: str, events: ArchiveEventLog | None = None) -> None:
        self._archive_name = archive_name
        self._events = events if events is not None else ArchiveEventLog()
        self._includes: list[str] = []
        self._excludes: list[str] = []

    @property
    def archive_name(self) -> str:
        return self._archive_name

    @property
    def includes(self) -> tuple[str, ...]:
        return tuple(self._includes)

    @property
    def excludes(self) -> tuple[str, ...]:
        return tuple(self._excludes)

    def add_include(self, path: str | os.PathLike[str]) -> bool:
        """Add ``path`` if it exists; return whether it was added."""
        normalized = normalize_path(path)
        if not os.path.exists(normalized):
            self._events.warning(
                PATH_NOT_FOUND,
                self._archive_name,
                f"The following path was not found: {normalized}. "
                f"This path will be omitted from the '{self._archive_name}' Archive.",
                path=normalized,
            )
            return False
        self._includes.append(normalized)
        return True

    def add_exclude(self, path: str | os.PathLike[str]) -> None:
        self._excludes.append(normalize_path(path))

    def extend(
        self,
        includes: Iterable[str | os.PathLike[str]] = (),
        excludes: Iterable[str | os.PathLike[str]] = (),
    ) -> None:
        for path in includes:
            self.add_include(path)
        for path in excludes:
            self.add_exclude(path)

    def render_includes(self) -> list[str]:
        """One argument per include path."""
        return list(self._includes)

    def render_excludes(self) -> list[str]:
        """One ``--exclude=<path>`` argument per exclude path."""
        return [f"--exclude={path}" for path in self._excludes]
