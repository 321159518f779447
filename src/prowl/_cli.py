"""Prowl CLI — prowl dev.

Entry point for the ``prowl`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the prowl CLI."""
    parser = argparse.ArgumentParser(
        prog="prowl",
        description="Live-reloading static file server for local development.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # prowl dev
    dev_parser = subparsers.add_parser(
        "dev",
        help="Serve a directory with live reload",
    )
    dev_parser.add_argument("root", nargs="?", default=".", help="Directory to serve")
    dev_parser.add_argument("--host", default=None, help="Bind address (default 127.0.0.1)")
    dev_parser.add_argument("--port", type=int, default=None, help="Bind port (default 3000)")
    dev_parser.add_argument(
        "--fallback", default=None, help="Page served when nothing else matches (default index.html)",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from prowl import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from prowl._errors import ConfigError
    from prowl.app import dev

    if args.command == "dev":
        try:
            dev(root=args.root, host=args.host, port=args.port, fallback=args.fallback)
        except ConfigError as exc:
            print(f"  Error: {exc}", file=sys.stderr)
            sys.exit(2)


if __name__ == "__main__":
    main()
