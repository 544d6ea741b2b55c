"""Presswork CLI — presswork build / presswork pages / presswork feed.

Entry point for the ``presswork`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the presswork CLI."""
    parser = argparse.ArgumentParser(
        prog="presswork",
        description="Compile JSON content into static pages and an RSS feed.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # presswork build
    build_parser = subparsers.add_parser(
        "build",
        help="Compile pages, posts, and the feed",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    build_parser.add_argument("--output", default=None, help="Output directory")
    build_parser.add_argument(
        "--base-url", default=None, help="Base URL for feed links",
    )

    # presswork pages
    pages_parser = subparsers.add_parser(
        "pages",
        help="Compile pages and posts only",
    )
    pages_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    pages_parser.add_argument("--output", default=None, help="Output directory")

    # presswork feed
    feed_parser = subparsers.add_parser(
        "feed",
        help="Compile the RSS feed only",
    )
    feed_parser.add_argument("root", nargs="?", default=".", help="Site root directory")
    feed_parser.add_argument("--output", default=None, help="Output directory")
    feed_parser.add_argument(
        "--base-url", default=None, help="Base URL for feed links",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from presswork import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from presswork._errors import PressworkError
    from presswork.app import build, build_feed, build_pages
    from presswork.banner import print_failure

    try:
        if args.command == "build":
            build(root=args.root, output=args.output, base_url=args.base_url)
        elif args.command == "pages":
            build_pages(root=args.root, output=args.output)
        elif args.command == "feed":
            build_feed(root=args.root, output=args.output, base_url=args.base_url)
    except (PressworkError, OSError) as exc:
        print_failure(args.command, exc)
        sys.exit(1)


if __name__ == "__main__":
    main()
