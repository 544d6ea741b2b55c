"""Presswork application entry points.

Two layers sit on top of the async pipelines:

- ``run_pages`` / ``run_feed`` — a two-channel completion signal.  Exactly
  one of ``on_done()`` or ``on_error(exc)`` fires, exactly once, and
  ``on_error`` receives the original exception object.
- ``build`` — the CLI-facing build: loads config, runs both pipelines,
  prints a summary.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING, Any

from presswork.batch import gather_all
from presswork.config_loader import load_config
from presswork.export.feed import compile_feed
from presswork.export.pages import compile_pages

if TYPE_CHECKING:
    from collections.abc import Callable, Coroutine

    from presswork._types import DoneCallback, ErrorCallback
    from presswork.config import PressworkConfig
    from presswork.export.records import ExportResult


def run_pages(
    root: str | Path,
    on_done: DoneCallback,
    on_error: ErrorCallback,
    **collaborators: object,
) -> None:
    """Compile pages and posts, then signal completion.

    Args:
        root: Site root directory.
        on_done: Called with no arguments after every page is written
            (including when there was nothing to write).
        on_error: Called with the first failure, unchanged.
        **collaborators: ``config``, ``fs``, ``discover``, ``renderer``,
            ``collector`` overrides passed to :func:`compile_pages`.

    """
    _run(lambda: compile_pages(root, **collaborators), on_done, on_error)  # type: ignore[arg-type]


def run_feed(
    root: str | Path,
    on_done: DoneCallback,
    on_error: ErrorCallback,
    **collaborators: object,
) -> None:
    """Compile the feed, then signal completion.

    Same contract as :func:`run_pages`.
    """
    _run(lambda: compile_feed(root, **collaborators), on_done, on_error)  # type: ignore[arg-type]


def _run(
    pipeline: Callable[[], Coroutine[Any, Any, ExportResult]],
    on_done: DoneCallback,
    on_error: ErrorCallback,
) -> None:
    # on_done runs outside the try so an exception it raises is never
    # reported through on_error as well.
    coro = pipeline()
    try:
        asyncio.run(coro)
    except Exception as exc:
        # asyncio.run() refuses to start inside a running loop and leaves
        # the coroutine unawaited.
        coro.close()
        on_error(exc)
        return
    on_done()


async def build_site(config: PressworkConfig) -> tuple[ExportResult, ExportResult]:
    """Run the page and feed pipelines concurrently, fail-fast.

    Each pipeline gets its own run context.
    """
    pages, feed = await gather_all([
        compile_pages(config=config),
        compile_feed(config=config),
    ])
    return pages, feed


def build(root: str | Path = ".", **kwargs: object) -> tuple[ExportResult, ExportResult]:
    """Compile the site's pages and feed, printing a summary to stderr.

    Args:
        root: Path to the site root directory.
        **kwargs: Override PressworkConfig fields.

    Returns:
        The page result and the feed result.

    """
    from presswork.banner import print_summary

    config = load_config(Path(root), **kwargs)
    pages, feed = asyncio.run(build_site(config))
    print_summary(config, pages=pages, feed=feed)
    return pages, feed


def build_pages(root: str | Path = ".", **kwargs: object) -> ExportResult:
    """Compile only pages and posts, printing a summary to stderr."""
    from presswork.banner import print_summary

    config = load_config(Path(root), **kwargs)
    pages = asyncio.run(compile_pages(config=config))
    print_summary(config, pages=pages)
    return pages


def build_feed(root: str | Path = ".", **kwargs: object) -> ExportResult:
    """Compile only the feed, printing a summary to stderr."""
    from presswork.banner import print_summary

    config = load_config(Path(root), **kwargs)
    feed = asyncio.run(compile_feed(config=config))
    print_summary(config, feed=feed)
    return feed
