"""Content loader — discover and parse JSON content descriptors.

Descriptors live at ``<root>/<content_dir>/<section>/*.json``.  Discovery
always runs first, so a discovery failure is reported before any other
error can happen.  Every error raised by the discovery or filesystem
primitives propagates unchanged.
"""

from __future__ import annotations

import json
import time
from typing import TYPE_CHECKING, Any

from presswork._errors import ConfigError
from presswork.batch import gather_all
from presswork.content.item import ContentItem, parse_item

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from presswork._types import Section
    from presswork.context import BuildContext


async def discover_content(
    ctx: BuildContext,
    sections: Sequence[Section] | None = None,
) -> list[Path]:
    """Find all descriptor files for *sections* (default: configured sections).

    Directories that don't exist contribute nothing.
    """
    config = ctx.config
    if sections is None:
        sections = config.sections
    patterns = [f"{config.content_dir}/{section}/*.json" for section in sections]
    return await ctx.discover(patterns, cwd=config.root)


async def load_item(ctx: BuildContext, path: Path) -> ContentItem:
    """Read and parse one descriptor.

    Raises:
        LoadError: If the file is not a valid descriptor.

    """
    t0 = time.perf_counter()
    text = await ctx.fs.read_text(path)
    item = parse_item(text, path)
    ctx.collector.record_load(
        str(path), item.slug or "", load_ms=(time.perf_counter() - t0) * 1000,
    )
    return item


async def load_items(
    ctx: BuildContext,
    sections: Sequence[Section] | None = None,
) -> list[ContentItem]:
    """Discover and load every descriptor concurrently.

    Any single failure fails the whole load.  Order is not guaranteed.
    """
    paths = await discover_content(ctx, sections)
    return await gather_all(load_item(ctx, path) for path in paths)


async def load_site(ctx: BuildContext) -> dict[str, Any]:
    """Read the site configuration and store it on the context.

    Raises:
        ConfigError: If the file is not a JSON object.

    """
    path = ctx.config.site_path
    text = await ctx.fs.read_text(path)
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a JSON object, got {type(data).__name__}"
        raise ConfigError(msg)
    ctx.site = data
    return data
