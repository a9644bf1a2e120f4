"""DTO for diagnostic events emitted while building an archive."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

PATH_NOT_FOUND = "path_not_found"
ARCHIVE_STARTED = "archive_started"
PARTIAL_READ = "partial_read"
ARCHIVE_COMPLETED = "archive_completed"
ARCHIVE_FAILED = "archive_failed"


@dataclass(frozen=True)
class ArchiveEvent:
    """Represents a single event for an archive build."""

    timestamp: datetime
    event_type: str
    archive_name: str
    level: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def is_warning(self) -> bool:
        return self.level == "warning"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type,
            "archive_name": self.archive_name,
            "level": self.level,
            "message": self.message,
            "details": self.details,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ArchiveEvent":
        """Create an ArchiveEvent from a dictionary."""
        return cls(
            timestamp=datetime.fromisoformat(data["timestamp"]),
            event_type=data["event_type"],
            archive_name=data["archive_name"],
            level=data.get("level", "info"),
            message=data.get("message", ""),
            details=data.get("details", {}),
        )
