"""Configuration value object for a single archive."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Mapping


def _as_tuple(values: Iterable[str] | str | None) -> tuple[str, ...]:
    if values is None:
        return ()
    if isinstance(values, str):
        return (values,)
    return tuple(str(value) for value in values)


@dataclass(frozen=True)
class ArchiveConfig:
    """Everything the archive builder consumes from configuration.

    Attributes:
        name: Archive identifier, used in file names and event labels
        includes: Paths to package, in order
        excludes: Paths or patterns passed to ``tar --exclude``
        tar_options: Extra ``tar`` arguments, e.g. ``"-h --xattrs"``
        allow_changed_files: Accept ``tar`` exit status 1 (files changed
            while being read). A warning is still emitted when it happens.
    """

    name: str
    includes: tuple[str, ...] = ()
    excludes: tuple[str, ...] = ()
    tar_options: str = ""
    allow_changed_files: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", str(self.name))
        object.__setattr__(self, "includes", _as_tuple(self.includes))
        object.__setattr__(self, "excludes", _as_tuple(self.excludes))
        object.__setattr__(self, "tar_options", self.tar_options or "")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ArchiveConfig":
        """Create an ArchiveConfig from a plain mapping (e.g. parsed JSON)."""
        includes = data.get("includes", data.get("paths"))
        return cls(
            name=data["name"],
            includes=_as_tuple(includes),
            excludes=_as_tuple(data.get("excludes")),
            tar_options=data.get("tar_options") or "",
            allow_changed_files=bool(data.get("allow_changed_files", False)),
        )
