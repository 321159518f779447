"""Event model for server observability.

Defines the events recorded while serving requests and fanning out
filesystem changes.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.
    The watch hub records from the watcher thread while handlers record
    from the event loop.

"""

import time
from dataclasses import dataclass
from typing import Literal


# ---------------------------------------------------------------------------
# Request events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RequestServed:
    """A request was answered.

    Attributes:
        path: Request path as received.
        status: HTTP status sent.
        handler: Which endpoint answered.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    status: int
    handler: Literal["static", "index", "glob", "notify"]
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RequestFailed:
    """A handler raised an unexpected error.

    Attributes:
        path: Request path as received.
        error: ``repr`` of the exception.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    error: str
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Watch events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class WatchDelivered:
    """A filesystem change was fanned out.

    Attributes:
        path: Root-relative path that changed.
        kind: Classified change kind.
        listeners: Number of listeners the change reached.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    kind: str
    listeners: int
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class ListenerChanged:
    """A notification listener was registered or removed."""

    action: Literal["subscribed", "unsubscribed"]
    listener_count: int
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

type ServerEvent = (
    RequestServed
    | RequestFailed
    | WatchDelivered
    | ListenerChanged
)


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
