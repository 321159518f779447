"""Served files — an open file plus the metadata needed to stream it.

``open_file`` is the byte-level open/stat primitive every handler builds on.
A :class:`ServedFile` is owned by exactly one response and must be closed on
every exit path; ``close()`` releases the handle once no matter how many
times it is called.
"""

from __future__ import annotations

import asyncio
import mimetypes
import os
import stat
from dataclasses import dataclass, field
from typing import IO, TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable
    from pathlib import Path

_DEFAULT_CHUNK_SIZE = 64 * 1024
_DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Non text/* types that are still text and get a charset
_TEXTUAL_TYPES = frozenset({
    "application/javascript",
    "application/json",
    "application/xml",
    "image/svg+xml",
})

# A few types the platform mime table gets wrong or lacks
_EXTRA_TYPES = {
    ".js": "application/javascript",
    ".mjs": "application/javascript",
    ".wasm": "application/wasm",
    ".webmanifest": "application/manifest+json",
}


def guess_content_type(name: str) -> str:
    """Return the content type for a filename, with charset for text."""
    _, ext = os.path.splitext(name)
    content_type = _EXTRA_TYPES.get(ext.lower())
    if content_type is None:
        content_type, _ = mimetypes.guess_type(name, strict=False)
    if content_type is None:
        return _DEFAULT_CONTENT_TYPE
    if content_type.startswith("text/") or content_type in _TEXTUAL_TYPES:
        return f"{content_type}; charset=utf-8"
    return content_type


@dataclass(slots=True)
class ServedFile:
    """A file opened for one response.

    Attributes:
        content_type: Value for the ``content-type`` header.
        size: Body length in bytes.
        last_modified: POSIX timestamp of the last modification, if known.

    """

    content_type: str
    size: int
    last_modified: float | None
    _source: Callable[[], AsyncGenerator[bytes, None]] = field(repr=False)
    _release: Callable[[], None] = field(repr=False)
    _closed: bool = field(default=False, repr=False)

    @property
    def closed(self) -> bool:
        """Whether the underlying resource has been released."""
        return self._closed

    def chunks(self) -> AsyncGenerator[bytes, None]:
        """Lazily yield the body, one chunk at a time."""
        return self._source()

    def close(self) -> None:
        """Release the underlying resource (only the first call does work)."""
        if self._closed:
            return
        self._closed = True
        self._release()

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        content_type: str,
        last_modified: float | None = None,
    ) -> ServedFile:
        """Wrap an in-memory body (used for synthesized responses)."""

        async def source() -> AsyncGenerator[bytes, None]:
            if data:
                yield data

        return cls(
            content_type=content_type,
            size=len(data),
            last_modified=last_modified,
            _source=source,
            _release=lambda: None,
        )


def open_file(path: Path, chunk_size: int = _DEFAULT_CHUNK_SIZE) -> ServedFile | None:
    """Open *path* for streaming, or return None if it is not a readable file."""
    try:
        handle: IO[bytes] = open(path, "rb")  # noqa: SIM115
    except OSError:
        return None

    try:
        info = os.fstat(handle.fileno())
    except OSError:
        handle.close()
        return None

    if not stat.S_ISREG(info.st_mode):
        handle.close()
        return None

    async def source() -> AsyncGenerator[bytes, None]:
        while True:
            chunk = await asyncio.to_thread(handle.read, chunk_size)
            if not chunk:
                return
            yield chunk

    return ServedFile(
        content_type=guess_content_type(path.name),
        size=info.st_size,
        last_modified=info.st_mtime,
        _source=source,
        _release=handle.close,
    )


async def open_in_thread[T](opener: Callable[..., T], *args: object) -> T:
    """Run a blocking open/stat call on a worker thread.

    If the awaiting task is cancelled while the call is still running, a
    :class:`ServedFile` it eventually returns is closed rather than leaked.
    """
    opening = asyncio.ensure_future(asyncio.to_thread(opener, *args))
    try:
        return await asyncio.shield(opening)
    except asyncio.CancelledError:
        opening.add_done_callback(_close_orphan)
        raise


def _close_orphan(opening: asyncio.Future[object]) -> None:
    if opening.cancelled() or opening.exception() is not None:
        return
    result = opening.result()
    if isinstance(result, ServedFile):
        result.close()
