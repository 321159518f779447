"""File layer — what exists under the root and how to open it.

Path filtering, recursive listing, glob matching, and request-path
resolution with its fallback chain.
"""

from prowl.files.filter import accepts
from prowl.files.glob import GlobMatcher, compile_glob, match_entries
from prowl.files.indexer import list_files
from prowl.files.resolver import FileResolver, NotFound
from prowl.files.served import ServedFile, open_file

__all__ = [
    "FileResolver",
    "GlobMatcher",
    "NotFound",
    "ServedFile",
    "accepts",
    "compile_glob",
    "list_files",
    "match_entries",
    "open_file",
]
