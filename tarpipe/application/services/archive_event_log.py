"""Diagnostics channel the archive builder reports through."""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable

from tarpipe.application.dto.archive_event import ArchiveEvent

logger = logging.getLogger(__name__)

_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

EventSubscriber = Callable[[ArchiveEvent], None]


class ArchiveEventLog:
    """Collect archive events and forward them to subscribers and logging."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._events: list[ArchiveEvent] = []
        self._subscribers: list[EventSubscriber] = []

    @property
    def events(self) -> list[ArchiveEvent]:
        with self._lock:
            return list(self._events)

    def subscribe(self, subscriber: EventSubscriber) -> None:
        """Register a callable receiving every future event."""
        with self._lock:
            self._subscribers.append(subscriber)

    def emit(
        self,
        event_type: str,
        archive_name: str,
        message: str,
        level: str = "info",
        details: dict[str, Any] | None = None,
    ) -> ArchiveEvent:
        """Record an event, log it, and hand it to each subscriber."""
        if level not in _LEVELS:
            raise ValueError(f"Unknown event level: {level}")
        event = ArchiveEvent(
            timestamp=datetime.now(timezone.utc),
            event_type=event_type,
            archive_name=archive_name,
            level=level,
            message=message,
            details=dict(details or {}),
        )
        with self._lock:
            self._events.append(event)
            subscribers = list(self._subscribers)
        logger.log(_LEVELS[level], f"[{archive_name}] {message}")
        for subscriber in subscribers:
            subscriber(event)
        return event

    def warning(self, event_type: str, archive_name: str, message: str, **details: Any) -> ArchiveEvent:
        return self.emit(event_type, archive_name, message, level="warning", details=details)

    def warnings(self) -> list[ArchiveEvent]:
        """Return only the warning events recorded so far."""
        return [event for event in self.events if event.is_warning]
