"""Request routes for the dev server.

Dispatch (first match wins):

- ``/@hot-notify``: change notification stream
- ``/@hot-index``: JSON array of every exposed file
- ``/@hot-glob``: multi-file glob stream
- anything else: static resolution, or 404

Every route answers GET and HEAD; other methods get a 405.  A failure
inside one request is reported and answered with a 500; it never takes
the server down.
"""

from __future__ import annotations

import asyncio
import sys
from typing import TYPE_CHECKING, Literal

from starlette.responses import JSONResponse, PlainTextResponse
from starlette.routing import Route

from prowl._errors import FilesystemError
from prowl.files.indexer import list_files
from prowl.files.resolver import FileResolver
from prowl.http.glob_stream import GlobStreamHandler
from prowl.http.notify import NotifyHandler
from prowl.http.static import StaticHandler
from prowl.observability.events import RequestFailed, RequestServed, now_ns

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from starlette.requests import Request
    from starlette.responses import Response

    from prowl.config import ProwlConfig
    from prowl.observability.log import EventLog
    from prowl.watch.hub import WatchHub

    type Endpoint = Callable[[Request], Awaitable[Response]]
    type ErrorHandler = Callable[[Request, Exception], Awaitable[Response]]


NOTIFY_ENDPOINT = "/@hot-notify"
INDEX_ENDPOINT = "/@hot-index"
GLOB_ENDPOINT = "/@hot-glob"


def create_routes(
    config: ProwlConfig,
    hub: WatchHub,
    event_log: EventLog | None = None,
) -> list[Route]:
    """Create the routes serving *config.root*.

    Args:
        config: Server configuration.
        hub: Watch hub shared by every notification stream.
        event_log: Where answered requests are recorded.

    """
    notify = NotifyHandler(hub, config.max_pending_events)
    glob = GlobStreamHandler(config.root, config.chunk_size)
    static = StaticHandler(FileResolver(config))

    async def index(request: Request) -> Response:
        try:
            entries = await asyncio.to_thread(list_files, config.root)
        except FilesystemError as exc:
            return PlainTextResponse(str(exc), status_code=500)
        return JSONResponse(entries)

    def recorded(
        name: Literal["static", "index", "glob", "notify"], endpoint: Endpoint
    ) -> Endpoint:
        async def handler(request: Request) -> Response:
            response = await endpoint(request)
            if event_log is not None:
                event_log.append(
                    RequestServed(
                        path=request.url.path,
                        status=response.status_code,
                        handler=name,
                        timestamp_ns=now_ns(),
                    )
                )
            return response

        return handler

    return [
        Route(NOTIFY_ENDPOINT, recorded("notify", notify.handle), methods=["GET"]),
        Route(INDEX_ENDPOINT, recorded("index", index), methods=["GET"]),
        Route(GLOB_ENDPOINT, recorded("glob", glob.handle), methods=["GET"]),
        Route("/{path:path}", recorded("static", static.handle), methods=["GET"]),
    ]


def failure_handler(event_log: EventLog | None = None) -> ErrorHandler:
    """Build the catch-all exception handler: report, record, answer 500."""

    async def on_error(request: Request, exc: Exception) -> Response:
        path = request.url.path
        print(f"  Request error: {path}: {exc!r}", file=sys.stderr)
        if event_log is not None:
            event_log.append(RequestFailed(path=path, error=repr(exc), timestamp_ns=now_ns()))
        return PlainTextResponse("Internal Server Error", status_code=500)

    return on_error
