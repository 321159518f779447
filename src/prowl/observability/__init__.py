"""Server observability — structured events for requests and watch fan-out.

Quick Start:
    >>> from prowl.observability import EventLog, RequestServed, now_ns
    >>> log = EventLog()
    >>> log.append(RequestServed(path="/", status=200, handler="static", timestamp_ns=now_ns()))
    >>> len(log)
    1

"""

from prowl.observability.events import (
    ListenerChanged,
    RequestFailed,
    RequestServed,
    ServerEvent,
    WatchDelivered,
    now_ns,
)
from prowl.observability.log import EventLog

__all__ = [
    "EventLog",
    "ListenerChanged",
    "RequestFailed",
    "RequestServed",
    "ServerEvent",
    "WatchDelivered",
    "now_ns",
]
