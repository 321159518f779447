"""Watch layer — one filesystem subscription, many listeners."""

from prowl.watch.hub import WatchEvent, WatchHub, classify
from prowl.watch.source import WatchfilesSource

__all__ = ["WatchEvent", "WatchHub", "WatchfilesSource", "classify"]
