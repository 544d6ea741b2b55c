"""Feed compiler — an RSS 2.0 document of the most recent posts.

Loads every page and post descriptor, keeps the non-draft items that carry
a ``date``, orders them newest first, and writes a single feed document.
Pages normally have no date and so never reach the feed.

The built-in generator never stamps the current time into the document:
``lastBuildDate`` is the newest entry's date, so rebuilding unchanged
content produces a byte-identical feed.
"""

from __future__ import annotations

import time
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from email.utils import format_datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any
from xml.etree.ElementTree import Element, SubElement, tostring

from presswork.batch import gather_all
from presswork.content.loader import discover_content, load_item, load_site
from presswork.context import BuildContext
from presswork.export.records import ExportedFile, ExportResult

if TYPE_CHECKING:
    from presswork._types import Discoverer, FileSystem, Renderer
    from presswork.config import PressworkConfig
    from presswork.content.item import ContentItem
    from presswork.observability.collector import BuildCollector


def select_entries(items: Iterable[ContentItem], limit: int = 0) -> list[ContentItem]:
    """Feed-eligible items, newest first.

    Eligible means dated and not a draft.  Dates are compared as instants
    in UTC, so entries with different offsets interleave correctly; dates
    that do not parse sort after every parsed one, by their raw text.  Ties
    are ordered by slug so the result does not depend on load order.  A
    positive *limit* keeps only that many entries.
    """
    eligible = [item for item in items if item.date and not item.is_draft]
    eligible.sort(key=_sort_key, reverse=True)
    if limit > 0:
        return eligible[:limit]
    return eligible


def _sort_key(item: ContentItem) -> tuple[bool, datetime | str, str]:
    parsed = _parse_date(item.date)
    if parsed is None:
        return (False, item.date or "", item.slug or "")
    return (True, parsed, item.slug or "")


def generate_feed(
    entries: Iterable[ContentItem],
    site: Mapping[str, Any],
    base_url: str = "",
) -> str:
    """Generate an RSS 2.0 XML string for *entries*, in the given order.

    Args:
        entries: Feed items, already filtered and sorted.
        site: Site configuration; ``title`` and ``description`` feed the
            channel header.
        base_url: Site base URL used for channel and item links.

    Returns:
        Complete XML string suitable for writing to ``rss.xml``.

    """
    base = base_url.rstrip("/")
    entries = list(entries)

    rss = Element("rss")
    rss.set("version", "2.0")
    channel = SubElement(rss, "channel")
    SubElement(channel, "title").text = str(site.get("title", ""))
    SubElement(channel, "link").text = f"{base}/"
    SubElement(channel, "description").text = str(site.get("description", ""))

    if entries:
        last_build = _rfc822(entries[0].date)
        if last_build:
            SubElement(channel, "lastBuildDate").text = last_build

    for entry in entries:
        item_el = SubElement(channel, "item")
        SubElement(item_el, "title").text = entry.title or ""
        if entry.slug:
            link = f"{base}/{entry.slug}/"
            SubElement(item_el, "link").text = link
            guid = SubElement(item_el, "guid")
            guid.set("isPermaLink", "true" if base else "false")
            guid.text = link
        pub_date = _rfc822(entry.date)
        if pub_date:
            SubElement(item_el, "pubDate").text = pub_date
        SubElement(item_el, "description").text = entry.body or ""

    xml = tostring(rss, encoding="unicode")
    return '<?xml version="1.0" encoding="UTF-8"?>\n' + xml + "\n"


def _parse_date(value: str | None) -> datetime | None:
    """ISO date/datetime as an aware UTC datetime; naive values count as UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _rfc822(value: str | None) -> str | None:
    """ISO date/datetime -> RFC 822 date, or None when it doesn't parse."""
    parsed = _parse_date(value)
    if parsed is None:
        return None
    return format_datetime(parsed, usegmt=True)


class FeedCompiler:
    """Compiles the feed document of a site.

    Args:
        ctx: The per-run build context.

    """

    def __init__(self, ctx: BuildContext) -> None:
        self._ctx = ctx

    async def compile(self) -> ExportResult:
        """Run the feed pipeline and return the result.

        Pipeline order:
            1. Discover descriptors (errors here win over everything else)
            2. Load the site configuration
            3. Load all descriptors concurrently, fail-fast
            4. Select and order entries
            5. Render and write the feed (skipped when there are no entries)

        Raises:
            Exception: The first failure, exactly as it was raised.

        """
        ctx = self._ctx
        start = time.perf_counter()
        try:
            paths = await discover_content(ctx)
            await load_site(ctx)
            items = await gather_all(load_item(ctx, path) for path in paths)
            entries = select_entries(items, ctx.config.feed_limit)
            files = (await self._write(entries),) if entries else ()
        except Exception as exc:
            ctx.collector.record_run(
                "feed", ok=False, error=exc,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
            raise

        skipped = sum(1 for item in items if item.is_draft)
        elapsed = (time.perf_counter() - start) * 1000
        ctx.collector.record_run(
            "feed", ok=True, files_written=len(files), skipped=skipped,
            duration_ms=elapsed,
        )
        return ExportResult(
            files=files,
            total_pages=0,
            skipped=skipped,
            duration_ms=elapsed,
            output_dir=ctx.config.output_path,
        )

    async def _write(self, entries: list[ContentItem]) -> ExportedFile:
        ctx = self._ctx
        t0 = time.perf_counter()

        document = await self._render(entries)
        target = ctx.config.feed_path
        await ctx.fs.make_dirs(target.parent)
        await ctx.fs.write_text(target, document)

        elapsed = (time.perf_counter() - t0) * 1000
        ctx.collector.record_build("write_feed", "feed", str(target), duration_ms=elapsed)
        return ExportedFile(
            source_path="feed",
            output_path=target,
            source_type="feed",
            size_bytes=len(document.encode("utf-8")),
            duration_ms=elapsed,
        )

    async def _render(self, entries: list[ContentItem]) -> str:
        """Render through ``feed_template`` when configured, else built-in RSS."""
        ctx = self._ctx
        config = ctx.config
        base_url = config.base_url or str(ctx.site.get("url", ""))
        if config.feed_template:
            source = await ctx.templates.get(config.feed_template)
            context = {
                "posts": [entry.as_context() for entry in entries],
                "site": ctx.site,
                "base_url": base_url.rstrip("/"),
            }
            return ctx.renderer(source, context)
        return generate_feed(entries, ctx.site, base_url)


async def compile_feed(
    root: str | Path | None = None,
    *,
    config: PressworkConfig | None = None,
    fs: FileSystem | None = None,
    discover: Discoverer | None = None,
    renderer: Renderer | None = None,
    collector: BuildCollector | None = None,
) -> ExportResult:
    """Compile the feed of the site under *root* (or *config*).

    Collaborators left as ``None`` get the local-filesystem defaults.
    """
    ctx = BuildContext.create(
        root, config=config, fs=fs, discover=discover,
        renderer=renderer, collector=collector,
    )
    return await FeedCompiler(ctx).compile()
