"""Event log — a bounded, thread-safe store of server events.

Thread Safety:
    Every method takes a ``threading.Lock``; the watcher thread and the
    event loop append concurrently.

"""

import threading
from collections import Counter, deque
from typing import Any

from prowl.observability.events import ServerEvent


class EventLog:
    """Ring buffer of :data:`ServerEvent` objects with simple queries.

    When full, the oldest events are discarded.

    Args:
        max_events: Maximum number of events to retain.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[ServerEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def append(self, event: ServerEvent) -> None:
        """Record an event."""
        with self._lock:
            self._events.append(event)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        limit: int = 100,
    ) -> list[ServerEvent]:
        """Return matching events, most recent first.

        Args:
            event_type: Only events of this type.
            since_ns: Only events at or after this timestamp.
            path: Only events whose ``path`` contains this substring.
            limit: Maximum number of events to return.

        """
        with self._lock:
            events = list(self._events)

        results: list[ServerEvent] = []
        for event in reversed(events):
            if len(results) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if since_ns and event.timestamp_ns < since_ns:
                continue
            if path is not None and path not in getattr(event, "path", ""):
                continue
            results.append(event)
        return results

    def recent(self, n: int = 20) -> list[ServerEvent]:
        """Return the N most recent events, oldest first."""
        with self._lock:
            items = list(self._events)
        return items[-n:]

    def clear(self) -> int:
        """Drop all events and return how many there were."""
        with self._lock:
            count = len(self._events)
            self._events.clear()
            return count

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def stats(self) -> dict[str, Any]:
        """Summary counts by event type."""
        with self._lock:
            by_type = Counter(type(event).__name__ for event in self._events)
            total = len(self._events)
        return {
            "total": total,
            "max_events": self._max_events,
            "by_type": dict(by_type),
        }
