"""Path filter — decides which paths are ever exposed to clients.

A path is hidden when any of its segments starts with ``.`` (dotfiles and
everything below a dot-directory such as ``.git/``).  Every component that
enumerates or reports filesystem paths goes through :func:`accepts`.
"""

import re

_SEPARATORS = re.compile(r"[\\/]")


def accepts(path: str) -> bool:
    """Return True if *path* may be listed, watched, or globbed."""
    return not any(segment.startswith(".") for segment in _SEPARATORS.split(path) if segment)
