"""Startup banner — status output for the dev server.

Detects ``NO_COLOR`` / ``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

from prowl.http.router import GLOB_ENDPOINT, INDEX_ENDPOINT, NOTIFY_ENDPOINT

if TYPE_CHECKING:
    from prowl.config import ProwlConfig


# ---------------------------------------------------------------------------
# ANSI helpers, respecting NO_COLOR (https://no-color.org)
# ---------------------------------------------------------------------------

def _supports_color() -> bool:
    """Return True if the terminal supports ANSI colors."""
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("TERM") == "dumb":
        return False
    return hasattr(sys.stderr, "isatty") and sys.stderr.isatty()


_COLOR = _supports_color()

_RESET = "\033[0m" if _COLOR else ""
_BOLD = "\033[1m" if _COLOR else ""
_DIM = "\033[2m" if _COLOR else ""
_CYAN = "\033[36m" if _COLOR else ""
_GREEN = "\033[32m" if _COLOR else ""


def _clickable_url(url: str) -> str:
    """Wrap *url* in an OSC 8 hyperlink escape if the terminal supports it."""
    if not _COLOR:
        return url
    return f"\033]8;;{url}\033\\{_BOLD}{_CYAN}{url}{_RESET}\033]8;;\033\\"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_banner(
    config: ProwlConfig,
    *,
    load_ms: float = 0.0,
    warnings: list[str] | None = None,
) -> None:
    """Print the Prowl startup banner to stderr.

    Args:
        config: Resolved ProwlConfig.
        load_ms: Time spent starting up in milliseconds.
        warnings: Optional list of warning messages to display.

    """
    from prowl import __version__

    timing = f" {_DIM}ready in {load_ms:.0f}ms{_RESET}" if load_ms > 0 else ""
    lines: list[str] = [
        "",
        f"  {_BOLD}Prowl{_RESET} {_DIM}v{__version__}{_RESET}  {_GREEN}[dev]{_RESET}{timing}",
        f"  {_DIM}{'─' * 43}{_RESET}",
        f"  {_DIM}├─{_RESET} root: {_DIM}{config.root}{_RESET}",
        f"  {_DIM}├─{_RESET} fallback: {_DIM}/{config.fallback}{_RESET}",
        f"  {_DIM}└─{_RESET} {_GREEN}live{_RESET} on {_DIM}{NOTIFY_ENDPOINT}{_RESET}, "
        f"{_DIM}{INDEX_ENDPOINT}{_RESET}, {_DIM}{GLOB_ENDPOINT}{_RESET}",
        "",
        f"  {_clickable_url(config.url)}",
    ]

    if warnings:
        lines.append("")
        lines.extend(f"  ! {w}" for w in warnings)

    lines.append("")

    print("\n".join(lines), file=sys.stderr)
