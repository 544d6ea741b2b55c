"""Build summary — compact, colour-aware status output.

Prints a short report of what a build wrote.  Detects ``NO_COLOR`` /
``TERM`` for safe fallback.
"""

from __future__ import annotations

import os
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from presswork.config import PressworkConfig
    from presswork.export.records import ExportResult


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
_GREEN = "\033[32m" if _COLOR else ""
_RED = "\033[31m" if _COLOR else ""
_YELLOW = "\033[33m" if _COLOR else ""


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def print_summary(
    config: PressworkConfig,
    *,
    pages: ExportResult | None = None,
    feed: ExportResult | None = None,
) -> None:
    """Print the build summary to stderr.

    Args:
        config: Resolved PressworkConfig.
        pages: Result of the page pipeline, if it ran.
        feed: Result of the feed pipeline, if it ran.

    """
    from presswork import __version__

    lines: list[str] = [
        "",
        f"  {_BOLD}presswork{_RESET} {_DIM}v{__version__}{_RESET}  {_YELLOW}[build]{_RESET}",
        f"  {_DIM}{'─' * 41}{_RESET}",
    ]

    if pages is not None:
        lines.append(f"  {_DIM}├─{_RESET} {_GREEN}{_plural(pages.total_pages, 'page')}{_RESET} written")
        if pages.skipped:
            lines.append(f"  {_DIM}├─{_RESET} {_plural(pages.skipped, 'draft')} skipped")

    if feed is not None:
        if feed.files:
            lines.append(f"  {_DIM}├─{_RESET} feed: {_DIM}{feed.files[0].output_path}{_RESET}")
        else:
            lines.append(f"  {_DIM}├─{_RESET} feed: {_DIM}no dated posts, not written{_RESET}")

    total_ms = sum(r.duration_ms for r in (pages, feed) if r is not None)
    lines.append(f"  {_DIM}└─{_RESET} output: {_DIM}{config.output_path}{_RESET}")
    lines.append(f"  Done in {total_ms:.0f}ms")
    lines.append("")

    print("\n".join(lines), file=sys.stderr)


def print_failure(pipeline: str, error: BaseException) -> None:
    """Print a one-line failure report to stderr."""
    print(f"  {_RED}✗{_RESET} {pipeline} failed: {error}", file=sys.stderr)
