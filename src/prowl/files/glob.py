"""Glob matcher — a restricted glob syntax compiled to a regex predicate.

Supported syntax:

- ``*`` matches any run of characters except ``/``
- ``**`` matches across ``/`` boundaries; ``**/`` matches zero or more
  whole segments
- everything else matches literally (no character classes, no braces)

Compilation never fails: characters outside the subset are escaped and
matched as themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True, slots=True)
class GlobMatcher:
    """A compiled glob pattern.

    Attributes:
        pattern: The raw pattern text as given by the client.
        regex: Anchored regex, or None for the empty pattern (matches nothing).

    """

    pattern: str
    regex: re.Pattern[str] | None

    def test(self, path: str) -> bool:
        """Return True if *path* matches the whole pattern."""
        if self.regex is None:
            return False
        return self.regex.fullmatch(path) is not None


def _translate(pattern: str) -> str:
    parts: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            if pattern.startswith("**", i):
                i += 2
                if i < n and pattern[i] == "/":
                    # "**/" spans zero or more whole segments
                    parts.append("(?:.*/)?")
                    i += 1
                else:
                    parts.append(".*")
                continue
            parts.append("[^/]*")
        else:
            parts.append(re.escape(ch))
        i += 1
    return "".join(parts)


def compile_glob(pattern: str) -> GlobMatcher:
    """Compile *pattern* into a :class:`GlobMatcher`.

    A single leading ``/`` or ``./`` is ignored so URL-style patterns match
    root-relative paths.
    """
    body = pattern
    if body.startswith("./"):
        body = body[2:]
    elif body.startswith("/"):
        body = body[1:]
    if not body:
        return GlobMatcher(pattern=pattern, regex=None)
    return GlobMatcher(pattern=pattern, regex=re.compile(_translate(body), re.DOTALL))


def match_entries(pattern: str, entries: Iterable[str]) -> list[str]:
    """Filter *entries* down to those selected by *pattern*, keeping order.

    An entry is selected when it is a substring of the raw pattern (plain
    filenames act as their own pattern) or when the compiled glob accepts it.
    """
    if not pattern:
        return []
    matcher = compile_glob(pattern)
    return [entry for entry in entries if entry in pattern or matcher.test(entry)]
