"""File resolver — maps a request path to the file that answers it.

Resolution order for a request path ``p``:

1. ``p`` itself, but only when its last segment contains a ``.``
2. a synthesized ``/sw.js`` that boots the hot-reload client
3. well-known browser/crawler noise paths short-circuit to not-found
4. ``p + ".html"``, ``p + "/index.html"``, ``/404.html``, ``/<fallback>``

Each step is a function returning a :class:`ServedFile` or None; the first
hit wins.
"""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from prowl.files.served import ServedFile, open_file

if TYPE_CHECKING:
    from prowl.config import ProwlConfig

SERVICE_WORKER_PATH = "/sw.js"

NOISE_PATHS = frozenset({
    "/apple-touch-icon-precomposed.png",
    "/apple-touch-icon.png",
    "/robots.txt",
    "/favicon.ico",
})


@dataclass(frozen=True, slots=True)
class NotFound:
    """The not-found arm of a resolution.

    Attributes:
        message: Plain-text body for the 404 response.

    """

    message: str = "Not Found"


NOISE_NOT_FOUND = NotFound("Not found")
CHAIN_NOT_FOUND = NotFound("Not Found")


def service_worker_source(hot_module_url: str) -> bytes:
    """Body of the synthesized ``/sw.js``."""
    return f'import hot from "{hot_module_url}";hot.listen();'.encode()


class FileResolver:
    """Resolves request paths against a root directory.

    Args:
        config: Server configuration (root, fallback, chunk size, hot module URL).

    """

    def __init__(self, config: ProwlConfig) -> None:
        self._root = config.root
        self._fallback = config.fallback
        self._chunk_size = config.chunk_size
        self._hot_module_url = config.hot_module_url

    def open(self, request_path: str) -> ServedFile | NotFound:
        """Return the file answering *request_path*, or a :class:`NotFound`."""
        last_segment = request_path.rsplit("/", 1)[-1]
        if "." in last_segment:
            served = self._open_relative(request_path)
            if served is not None:
                return served

        if request_path == SERVICE_WORKER_PATH:
            return ServedFile.from_bytes(
                service_worker_source(self._hot_module_url),
                "application/javascript; charset=utf-8",
                last_modified=time.time(),
            )

        if request_path in NOISE_PATHS:
            return NOISE_NOT_FOUND

        for candidate in self.fallback_chain(request_path):
            served = self._open_relative(candidate)
            if served is not None:
                return served
        return CHAIN_NOT_FOUND

    def fallback_chain(self, request_path: str) -> tuple[str, ...]:
        """Candidates tried, in order, once the direct lookup has failed."""
        return (
            request_path + ".html",
            request_path + "/index.html",
            "/404.html",
            "/" + self._fallback,
        )

    def _open_relative(self, request_path: str) -> ServedFile | None:
        path = self._to_filesystem_path(request_path)
        if path is None:
            return None
        return open_file(path, self._chunk_size)

    def _to_filesystem_path(self, request_path: str) -> Path | None:
        """Join *request_path* onto the root; None if it would escape it."""
        relative = os.path.normpath(request_path.lstrip("/")) if request_path.strip("/") else "."
        if relative == ".." or relative.startswith(("../", "..\\")) or os.path.isabs(relative):
            return None
        return Path(self._root, relative)
