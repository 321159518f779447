"""Directory indexer — recursive listing of every exposable file.

Walks the tree depth-first, visiting entries of each directory in name
order, and skips hidden files and hidden directory subtrees.  Nothing is
cached: each call walks the filesystem again.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from prowl._errors import FilesystemError
from prowl.files.filter import accepts

if TYPE_CHECKING:
    from pathlib import Path

    from prowl._types import RelativePath


def list_files(root: Path) -> list[RelativePath]:
    """Return root-relative POSIX paths of all files below *root*.

    Raises:
        FilesystemError: If *root* (or a directory below it) cannot be read.

    """
    files: list[RelativePath] = []
    _walk(os.fspath(root), "", files)
    return files


def _walk(directory: str, prefix: str, out: list[str]) -> None:
    try:
        with os.scandir(directory) as it:
            entries = sorted(it, key=lambda e: e.name)
    except OSError as exc:
        msg = f"Cannot list {directory}: {exc.strerror or exc}"
        raise FilesystemError(msg) from exc

    for entry in entries:
        name = f"{prefix}/{entry.name}" if prefix else entry.name
        if not accepts(entry.name):
            continue
        if entry.is_dir(follow_symlinks=False):
            _walk(entry.path, name, out)
        elif entry.is_file():
            out.append(name)
