"""Repository for storing archive events in JSONL format."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Iterator

from tarpipe.application.dto.archive_event import ArchiveEvent


class ArchiveEventRepository:
    """Thread-safe JSONL file storage for archive events.

    Instances are callable, so one can be passed straight to
    ``ArchiveEventLog.subscribe``.
    """

    def __init__(self, logs_root: Path) -> None:
        self._logs_root = logs_root
        self._lock = threading.Lock()
        self._events_file = logs_root / "archive_events.jsonl"

    def __call__(self, event: ArchiveEvent) -> None:
        self.append_event(event)

    @property
    def events_file(self) -> Path:
        return self._events_file

    def _ensure_dir(self) -> None:
        """Create logs directory if it doesn't exist."""
        self._logs_root.mkdir(parents=True, exist_ok=True)

    def append_event(self, event: ArchiveEvent) -> None:
        """Append an event to the JSONL log file."""
        with self._lock:
            self._ensure_dir()
            with self._events_file.open("a", encoding="utf-8") as f:
                f.write(json.dumps(event.to_dict()) + "\n")

    def list_events(
        self,
        event_type: str | None = None,
        limit: int | None = None,
    ) -> list[ArchiveEvent]:
        """List events with optional filtering."""
        events: list[ArchiveEvent] = []
        with self._lock:
            if not self._events_file.exists():
                return events
            for event in self._iter_events_unlocked():
                if event_type and event.event_type != event_type:
                    continue
                events.append(event)
                if limit and len(events) >= limit:
                    break
        return events

    def _iter_events_unlocked(self) -> Iterator[ArchiveEvent]:
        with self._events_file.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    yield ArchiveEvent.from_dict(json.loads(line))
                except (json.JSONDecodeError, KeyError, ValueError):
                    continue

    def get_stats(self) -> dict[str, object]:
        """Count builds and warnings recorded in the log."""
        events = self.list_events()
        counts: dict[str, int] = {}
        for event in events:
            counts[event.event_type] = counts.get(event.event_type, 0) + 1
        return {
            "started": counts.get("archive_started", 0),
            "completed": counts.get("archive_completed", 0),
            "failed": counts.get("archive_failed", 0),
            "warnings": sum(1 for event in events if event.is_warning),
            "by_type": counts,
        }
