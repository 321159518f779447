"""Glob stream — many files matching one pattern, in a single response.

Body layout::

    ["a.txt","b.txt"]
    \\n\\n---a.txt---\\n\\n<bytes of a.txt>
    \\n\\n---b.txt---\\n\\n<bytes of b.txt>

The JSON array of matched names goes out first so the client knows the
whole match set before any content arrives.  Files are opened one at a
time, in listing order, and each is closed before the next is opened.
"""

from __future__ import annotations

import asyncio
import contextlib
import json
import sys
from typing import TYPE_CHECKING

from starlette.responses import PlainTextResponse, Response, StreamingResponse

from prowl._errors import FilesystemError
from prowl.files.glob import match_entries
from prowl.files.indexer import list_files
from prowl.files.served import open_file, open_in_thread

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator
    from pathlib import Path

    from starlette.requests import Request

    from prowl.files.served import ServedFile


GLOB_CONTENT_TYPE = "hot/glob"
EMPTY_MATCH = b"[]"


def delimiter(filename: str) -> bytes:
    """Separator written before each file's content."""
    return f"\n\n---{filename}---\n\n".encode()


class GlobStreamHandler:
    """Endpoint for ``/@hot-glob?pattern=...``.

    Args:
        root: Directory to list and read from.
        chunk_size: Read size for file content.

    """

    def __init__(self, root: Path, chunk_size: int = 64 * 1024) -> None:
        self._root = root
        self._chunk_size = chunk_size

    async def handle(self, request: Request) -> Response:
        pattern = request.query_params.get("pattern")
        if not pattern:
            return Response(EMPTY_MATCH, media_type=GLOB_CONTENT_TYPE)

        try:
            entries = await asyncio.to_thread(list_files, self._root)
        except FilesystemError as exc:
            return PlainTextResponse(str(exc), status_code=500)

        matched = match_entries(pattern, entries)
        if not matched:
            return Response(EMPTY_MATCH, media_type=GLOB_CONTENT_TYPE)

        return StreamingResponse(self.body(matched), media_type=GLOB_CONTENT_TYPE)

    async def body(self, matched: list[str]) -> AsyncGenerator[bytes, None]:
        """The match list, then each file behind its delimiter."""
        yield json.dumps(matched, separators=(",", ":")).encode()

        current: ServedFile | None = None
        try:
            for filename in matched:
                yield delimiter(filename)
                current = await open_in_thread(
                    open_file, self._root / filename, self._chunk_size
                )
                if current is None:
                    # Removed between listing and open: delimiter, no content
                    print(f"  Glob skipped vanished file: {filename}", file=sys.stderr)
                    continue
                async with contextlib.aclosing(current.chunks()) as chunks:
                    async for chunk in chunks:
                        yield chunk
                current.close()
                current = None
        finally:
            if current is not None:
                current.close()
