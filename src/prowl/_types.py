"""Shared type definitions for prowl."""

from collections.abc import Callable
from typing import Literal

# Classified filesystem change kind, as sent to clients
type WatchKind = Literal["create", "modify", "remove", "rename"]

# Root-relative POSIX path (no leading slash)
type RelativePath = str

# Opaque handle returned by WatchHub.subscribe()
type ListenerHandle = int

# Raw watch primitive callback: (raw kind, root-relative path)
type RawWatchCallback = Callable[[str, str], None]
