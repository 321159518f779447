"""HTTP layer — Starlette routes and the endpoint handlers behind them.

Static files go through the resolver; ``/@hot-notify``, ``/@hot-index`` and
``/@hot-glob`` serve the live-reload client.
"""

from prowl.http.glob_stream import GlobStreamHandler
from prowl.http.notify import NotifyHandler, Subscription, format_frame
from prowl.http.router import (
    GLOB_ENDPOINT,
    INDEX_ENDPOINT,
    NOTIFY_ENDPOINT,
    create_routes,
    failure_handler,
)
from prowl.http.static import StaticHandler

__all__ = [
    "GLOB_ENDPOINT",
    "INDEX_ENDPOINT",
    "NOTIFY_ENDPOINT",
    "GlobStreamHandler",
    "NotifyHandler",
    "StaticHandler",
    "Subscription",
    "create_routes",
    "failure_handler",
    "format_frame",
]
