"""Page/post compiler — one HTML file per non-draft content item.

Every descriptor under the configured sections is compiled by its own
task (read, parse, resolve template, render, write).  All tasks start
together and are joined fail-fast: the first failure is the run's
failure, and no result is produced after it.

Output follows the clean URL convention::

    slug "about"        -> <output>/about/index.html
    slug "blog/hello"   -> <output>/blog/hello/index.html

"""

from __future__ import annotations

import time
from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING, Any

from presswork._errors import WriteError
from presswork.batch import gather_all
from presswork.content.loader import discover_content, load_item, load_site
from presswork.context import BuildContext
from presswork.export.records import ExportedFile, ExportResult

if TYPE_CHECKING:
    from presswork._types import Discoverer, FileSystem, Renderer
    from presswork.config import PressworkConfig
    from presswork.content.item import ContentItem
    from presswork.observability.collector import BuildCollector


def body_class_for(item: ContentItem) -> str | None:
    """Derive the body class string for a tagged item.

    ``"<template stem>-template"`` followed by one ``"tag-<token>"`` per tag,
    in the order the tags appear.  Items without ``tags`` get ``None``.
    """
    if item.tags is None:
        return None
    classes = [f"{item.template_stem}-template"]
    classes.extend(f"tag-{tag}" for tag in item.tag_list)
    return " ".join(classes)


def build_page_context(item: ContentItem, site: dict[str, Any]) -> dict[str, Any]:
    """Template context for one item: ``post``, ``site``, and ``body_class``."""
    context: dict[str, Any] = {"post": item.as_context(), "site": site}
    body_class = body_class_for(item)
    if body_class is not None:
        context["body_class"] = body_class
    return context


class PageCompiler:
    """Compiles every eligible content item of a site to HTML.

    Args:
        ctx: The per-run build context.

    """

    def __init__(self, ctx: BuildContext) -> None:
        self._ctx = ctx

    async def compile(self) -> ExportResult:
        """Run the page pipeline and return the result.

        Pipeline order:
            1. Discover descriptors (errors here win over everything else)
            2. Load the site configuration
            3. Compile all descriptors concurrently, fail-fast

        Raises:
            Exception: The first failure, exactly as it was raised.

        """
        ctx = self._ctx
        start = time.perf_counter()
        try:
            paths = await discover_content(ctx)
            await load_site(ctx)
            outcomes = await gather_all(self._compile_one(path) for path in paths)
        except Exception as exc:
            ctx.collector.record_run(
                "pages", ok=False, error=exc,
                duration_ms=(time.perf_counter() - start) * 1000,
            )
            raise

        files = tuple(outcome for outcome in outcomes if outcome is not None)
        skipped = len(outcomes) - len(files)
        elapsed = (time.perf_counter() - start) * 1000
        ctx.collector.record_run(
            "pages", ok=True, files_written=len(files), skipped=skipped,
            duration_ms=elapsed,
        )
        return ExportResult(
            files=files,
            total_pages=len(files),
            skipped=skipped,
            duration_ms=elapsed,
            output_dir=ctx.config.output_path,
        )

    async def _compile_one(self, path: Path) -> ExportedFile | None:
        """Compile one descriptor; ``None`` when it is a draft."""
        ctx = self._ctx
        t0 = time.perf_counter()

        item = await load_item(ctx, path)
        if item.is_draft:
            ctx.collector.record_build("skip_draft", str(path))
            return None

        target = self.output_path_for(item.slug, ctx.config.output_path)
        source = await ctx.templates.get(item.template)
        html = ctx.renderer(source, build_page_context(item, ctx.site))

        await ctx.fs.make_dirs(target.parent)
        await ctx.fs.write_text(target, html)

        elapsed = (time.perf_counter() - t0) * 1000
        ctx.collector.record_build(
            "render_page", str(path), str(target), duration_ms=elapsed,
        )
        return ExportedFile(
            source_path=str(path),
            output_path=target,
            source_type="content",
            size_bytes=len(html.encode("utf-8")),
            duration_ms=elapsed,
        )

    @staticmethod
    def output_path_for(slug: str | None, output_dir: Path) -> Path:
        """Convert a slug to its output file path.

        Raises:
            WriteError: If the slug is missing or blank, or would place the
                file outside *output_dir*.

        """
        if slug is None or not slug.strip():
            msg = f"Content item has no slug, nothing to write under {output_dir}"
            raise WriteError(msg)
        relative = PurePosixPath(slug)
        if (
            relative.is_absolute()
            or "\\" in slug
            or any(part in ("", ".", "..") for part in relative.parts)
            or not relative.parts
        ):
            msg = f"Slug {slug!r} does not name a path inside {output_dir}"
            raise WriteError(msg)
        return output_dir / relative / "index.html"


async def compile_pages(
    root: str | Path | None = None,
    *,
    config: PressworkConfig | None = None,
    fs: FileSystem | None = None,
    discover: Discoverer | None = None,
    renderer: Renderer | None = None,
    collector: BuildCollector | None = None,
) -> ExportResult:
    """Compile all pages and posts under *root* (or *config*) to HTML files.

    Collaborators left as ``None`` get the local-filesystem defaults.
    """
    ctx = BuildContext.create(
        root, config=config, fs=fs, discover=discover,
        renderer=renderer, collector=collector,
    )
    return await PageCompiler(ctx).compile()
