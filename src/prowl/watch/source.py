"""Raw filesystem watch primitive backed by watchfiles.

Runs ``watchfiles.watch`` on a daemon thread for the life of the process
and reports every raw change as ``(raw kind, root-relative path)``.
"""

from __future__ import annotations

import sys
import threading
from pathlib import Path
from typing import TYPE_CHECKING

from watchfiles import Change

if TYPE_CHECKING:
    from prowl._types import RawWatchCallback


# watchfiles Change enum to the raw kind names the hub classifies
RAW_KINDS: dict[Change, str] = {
    Change.added: "added",
    Change.modified: "modified",
    Change.deleted: "deleted",
}


def relative_to_root(path: str, root: Path) -> str | None:
    """Return *path* relative to *root* in POSIX form, or None if outside."""
    candidate = Path(path)
    try:
        rel = candidate.relative_to(root)
    except ValueError:
        try:
            rel = candidate.relative_to(root.resolve())
        except ValueError:
            return None
    if not rel.parts:
        return None
    return rel.as_posix()


class WatchfilesSource:
    """Watch primitive: ``source(root, callback)`` starts watching *root*.

    Each call spawns one daemon thread; the hub guarantees it is called at
    most once per server instance.

    Args:
        debounce_ms: Debounce window passed to watchfiles.

    """

    def __init__(self, debounce_ms: int = 50) -> None:
        self._debounce_ms = debounce_ms
        self._stop_event = threading.Event()
        self._threads: list[threading.Thread] = []

    def __call__(self, root: Path, callback: RawWatchCallback) -> None:
        if not root.is_dir():
            msg = f"Cannot watch {root}: not a directory"
            raise OSError(msg)
        thread = threading.Thread(
            target=self._watch_loop,
            args=(root, callback),
            name="prowl-watcher",
            daemon=True,
        )
        self._threads.append(thread)
        thread.start()

    def stop(self) -> None:
        """Signal every watcher thread to stop and wait for them."""
        self._stop_event.set()
        for thread in self._threads:
            thread.join(timeout=5.0)
        self._threads.clear()

    def _watch_loop(self, root: Path, callback: RawWatchCallback) -> None:
        """Background thread: run watchfiles and forward raw changes."""
        from watchfiles import watch

        # No watch_filter: the hub's path filter is the only one applied
        for raw_changes in watch(
            root,
            watch_filter=None,
            stop_event=self._stop_event,
            debounce=self._debounce_ms,
            step=50,
            recursive=True,
        ):
            # watchfiles hands back a set; sort for a stable delivery order
            for change_type, path_str in sorted(raw_changes, key=lambda c: c[1]):
                rel = relative_to_root(path_str, root)
                if rel is None:
                    continue
                try:
                    callback(RAW_KINDS.get(change_type, "modified"), rel)
                except Exception as exc:
                    print(f"  Watch dispatch error: {rel}: {exc}", file=sys.stderr)
