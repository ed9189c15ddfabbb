"""spacache CLI — serve a build directory from memory.

Entry point registered as ``spacache`` in ``pyproject.toml``::

    [project.scripts]
    spacache = "spacache.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``spacache`` command."""
    parser = argparse.ArgumentParser(
        prog="spacache",
        description="spacache — serve a single-page application bundle from memory.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- spacache serve ---------------------------------------------------
    serve_parser = subparsers.add_parser("serve", help="Serve a build directory")
    serve_parser.add_argument(
        "dist",
        nargs="?",
        default=None,
        help="Build output directory (default: ./dist)",
    )
    serve_parser.add_argument("--glob", default=None, help="Files to load (default: **/*)")
    serve_parser.add_argument(
        "--index",
        default=None,
        help="Fallback document, relative to dist (default: index.html)",
    )
    serve_parser.add_argument(
        "--placeholder",
        default=None,
        help="Literal marker in index.html to replace with injected content",
    )
    serve_parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="Also load dot-files and files in dot-directories",
    )
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    serve_parser.add_argument(
        "--log-level",
        default=None,
        choices=["debug", "info", "warning", "error"],
        help="Logging level (default: info)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "serve":
        from spacache.cli._serve import serve

        serve(args)
