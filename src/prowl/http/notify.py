"""Notification stream — filesystem changes pushed to browsers over SSE.

Each connection arms the watch hub (only the first one does any work),
registers a :class:`Subscription` while its stream is open, and streams one
``fs-notify`` frame per change.  There is no replay of missed events.

Backpressure: a subscription buffers at most ``max_pending`` undelivered
events.  When a slow client lets the buffer fill up, the subscription is
marked overflowed and its stream ends; the hub and every other listener
carry on unaffected.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
from typing import TYPE_CHECKING

from starlette.responses import PlainTextResponse, StreamingResponse

from prowl._errors import FilesystemError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request
    from starlette.responses import Response

    from prowl.watch.hub import WatchEvent, WatchHub


NOTIFY_COMMENT = b": hot notify stream\n\n"
SSE_MEDIA_TYPE = "text/event-stream"


def format_frame(event: WatchEvent) -> bytes:
    """Serialize a change as an ``fs-notify`` server-sent event."""
    data = json.dumps({"type": event.kind, "name": "/" + event.path}, separators=(",", ":"))
    return f"event: fs-notify\ndata: {data}\n\n".encode()


class Subscription:
    """A hub listener feeding one connection's event loop.

    Called from whatever thread the hub dispatches on; events are handed to
    *loop* with ``call_soon_threadsafe`` so the hub never blocks and the
    per-connection order is the dispatch order.

    Args:
        loop: Event loop of the connection that owns this subscription.
        max_pending: Buffer bound before the subscription overflows.

    """

    def __init__(self, loop: asyncio.AbstractEventLoop, max_pending: int) -> None:
        self._loop = loop
        self._queue: asyncio.Queue[WatchEvent] = asyncio.Queue(maxsize=max_pending)
        self._closed = False
        self._overflowed = False

    @property
    def overflowed(self) -> bool:
        """True once the buffer filled up; the stream ends at that point."""
        return self._overflowed

    @property
    def pending(self) -> int:
        """Events buffered but not yet streamed."""
        return self._queue.qsize()

    def __call__(self, event: WatchEvent) -> None:
        if self._closed or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(self._offer, event)

    def _offer(self, event: WatchEvent) -> None:
        if self._closed or self._overflowed:
            return
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self._overflowed = True

    async def events(self) -> AsyncGenerator[WatchEvent, None]:
        """Yield events in arrival order until closed or overflowed."""
        while not (self._closed or self._overflowed):
            yield await self._queue.get()

    def close(self) -> None:
        """Stop accepting events.  Anything still buffered is dropped."""
        self._closed = True


class NotifyHandler:
    """Endpoint for the change notification stream.

    Args:
        hub: The process-wide watch hub.
        max_pending: Per-connection backpressure bound.

    """

    def __init__(self, hub: WatchHub, max_pending: int = 256) -> None:
        self._hub = hub
        self._max_pending = max_pending

    async def handle(self, request: Request) -> Response:
        try:
            self._hub.arm()
        except FilesystemError as exc:
            return PlainTextResponse(str(exc), status_code=500)

        return StreamingResponse(
            self.frames(),
            media_type=SSE_MEDIA_TYPE,
            headers={"cache-control": "no-cache"},
        )

    async def frames(self) -> AsyncGenerator[bytes, None]:
        """The SSE body: an opening comment, then one frame per change.

        The listener is registered when the body starts and removed when
        the body is closed, whether it ended or the client went away.
        """
        subscription = Subscription(asyncio.get_running_loop(), self._max_pending)
        handle = self._hub.subscribe(subscription)
        try:
            yield NOTIFY_COMMENT
            async with contextlib.aclosing(subscription.events()) as events:
                async for event in events:
                    yield format_frame(event)
        finally:
            subscription.close()
            self._hub.unsubscribe(handle)
