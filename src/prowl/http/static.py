"""Static handler — serves files through the resolver's fallback chain."""

from __future__ import annotations

import contextlib
from email.utils import formatdate
from typing import TYPE_CHECKING

from starlette.background import BackgroundTask
from starlette.responses import PlainTextResponse, Response, StreamingResponse

from prowl.files.resolver import NotFound
from prowl.files.served import open_in_thread

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

    from prowl.files.resolver import FileResolver
    from prowl.files.served import ServedFile


def file_headers(served: ServedFile) -> dict[str, str]:
    """Response headers describing *served* (besides its content type)."""
    headers = {"content-length": str(served.size)}
    if served.last_modified is not None:
        headers["last-modified"] = formatdate(served.last_modified, usegmt=True)
    return headers


async def stream_file(served: ServedFile) -> AsyncGenerator[bytes, None]:
    """Yield the body of *served* chunk by chunk, closing it when done."""
    try:
        async with contextlib.aclosing(served.chunks()) as chunks:
            async for chunk in chunks:
                yield chunk
    finally:
        served.close()


class StaticHandler:
    """Endpoint for every path that is not a ``/@hot-*`` endpoint.

    Args:
        resolver: Maps request paths to files.

    """

    def __init__(self, resolver: FileResolver) -> None:
        self._resolver = resolver

    async def handle(self, request: Request) -> Response:
        result = await open_in_thread(self._resolver.open, request.url.path)
        if isinstance(result, NotFound):
            return PlainTextResponse(result.message, status_code=404)

        headers = file_headers(result)
        if request.method == "HEAD":
            result.close()
            return Response(headers=headers, media_type=result.content_type)

        # The background close covers a body that was never started
        return StreamingResponse(
            stream_file(result),
            headers=headers,
            media_type=result.content_type,
            background=BackgroundTask(result.close),
        )
