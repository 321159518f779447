"""Watch hub — one filesystem subscription fanned out to many listeners.

The hub starts unarmed.  The first ``arm()`` call subscribes to the watch
source; every later call is a no-op, and nothing ever disarms it.  Raw
events are classified, filtered, and handed synchronously to every
registered listener.

Thread Safety:
    The listener registry is guarded by a ``threading.Lock`` held only while
    it is mutated or copied.  Fan-out iterates a snapshot and re-checks
    membership before each call, so a listener removed mid-fan-out is
    skipped rather than called.

"""

from __future__ import annotations

import itertools
import sys
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

from prowl._errors import FilesystemError
from prowl.files.filter import accepts
from prowl.observability.events import ListenerChanged, WatchDelivered, now_ns

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from prowl._types import ListenerHandle, RawWatchCallback, WatchKind
    from prowl.observability.log import EventLog

    type Listener = Callable[[WatchEvent], None]
    type WatchSource = Callable[[Path, RawWatchCallback], None]


@dataclass(frozen=True, slots=True)
class WatchEvent:
    """A classified filesystem change.

    Attributes:
        kind: What happened to the path.
        path: Root-relative POSIX path; always accepted by the path filter.

    """

    kind: WatchKind
    path: str


_KIND_MAP: dict[str, WatchKind] = {
    "change": "modify",
    "changed": "modify",
    "modified": "modify",
    "modify": "modify",
    "added": "create",
    "create": "create",
    "deleted": "remove",
    "remove": "remove",
    "rename": "rename",
}


def classify(raw_kind: str, path: str) -> WatchEvent | None:
    """Turn a raw watch report into a :class:`WatchEvent`.

    Returns None for paths the filter rejects.  Unknown raw kinds are
    reported as ``modify``.
    """
    path = path.replace("\\", "/").lstrip("/")
    if not path or not accepts(path):
        return None
    return WatchEvent(kind=_KIND_MAP.get(raw_kind, "modify"), path=path)


class WatchHub:
    """Process-wide fan-out of filesystem changes under one root.

    Args:
        root: Directory to watch recursively once armed.
        source: Watch primitive, called once as ``source(root, callback)``.
        event_log: Optional event log for delivery and listener events.

    """

    def __init__(
        self,
        root: Path,
        source: WatchSource,
        event_log: EventLog | None = None,
    ) -> None:
        self._root = root
        self._source = source
        self._event_log = event_log
        self._armed = False
        self._arm_lock = threading.Lock()
        self._listeners: dict[ListenerHandle, Listener] = {}
        self._lock = threading.Lock()
        self._handles = itertools.count(1)

    @property
    def armed(self) -> bool:
        """Whether the filesystem subscription has been made."""
        return self._armed

    @property
    def listener_count(self) -> int:
        """Number of currently registered listeners."""
        with self._lock:
            return len(self._listeners)

    def arm(self) -> bool:
        """Subscribe to the watch source if that has not happened yet.

        Safe to call from any number of concurrent first connections; the
        source is invoked exactly once.

        Returns:
            True for the call that armed the hub, False otherwise.

        Raises:
            FilesystemError: If the subscription fails.  The hub stays
                unarmed so a later connection can try again.

        """
        if self._armed:
            return False
        with self._arm_lock:
            if self._armed:
                return False
            try:
                self._source(self._root, self.dispatch)
            except OSError as exc:
                msg = f"Cannot watch {self._root}: {exc}"
                raise FilesystemError(msg) from exc
            self._armed = True
        print(f"  Watching for file changes in {self._root}", file=sys.stderr)
        return True

    def subscribe(self, listener: Listener) -> ListenerHandle:
        """Register *listener* and return its handle."""
        with self._lock:
            handle = next(self._handles)
            self._listeners[handle] = listener
            count = len(self._listeners)
        self._record(ListenerChanged(action="subscribed", listener_count=count, timestamp_ns=now_ns()))
        return handle

    def unsubscribe(self, handle: ListenerHandle) -> None:
        """Remove a listener.  Unknown handles are ignored."""
        with self._lock:
            removed = self._listeners.pop(handle, None)
            count = len(self._listeners)
        if removed is not None:
            self._record(
                ListenerChanged(action="unsubscribed", listener_count=count, timestamp_ns=now_ns())
            )

    def dispatch(self, raw_kind: str, path: str) -> WatchEvent | None:
        """Classify one raw report and deliver it to every listener.

        This is the callback handed to the watch source.  Returns the
        delivered event, or None if the path was filtered out.
        """
        event = classify(raw_kind, path)
        if event is None:
            return None

        with self._lock:
            snapshot = list(self._listeners.items())

        delivered = 0
        for handle, listener in snapshot:
            if handle not in self._listeners:
                continue
            try:
                listener(event)
                delivered += 1
            except Exception as exc:
                print(f"  Listener error: {event.path}: {exc}", file=sys.stderr)

        self._record(
            WatchDelivered(
                path=event.path, kind=event.kind, listeners=delivered, timestamp_ns=now_ns()
            )
        )
        return event

    def _record(self, event: WatchDelivered | ListenerChanged) -> None:
        if self._event_log is not None:
            self._event_log.append(event)
