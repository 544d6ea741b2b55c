"""Shared test fixtures for presswork."""

from __future__ import annotations

import asyncio
import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

PAGE_TEMPLATE = '<div class="page"><h1>{{post.title}}</h1>{{{post.body}}}</div>'
POST_TEMPLATE = '<div class="post"><h1>{{post.title}}</h1>{{{post.body}}}</div>'


@pytest.fixture
def tmp_site(tmp_path: Path) -> Path:
    """Create a minimal site structure for testing.

    Returns the site root with site.json, src/templates/ (page.hbs, post.hbs,
    an empty partials/ dir) and empty build/content/{pages,posts}/ dirs.
    """
    (tmp_path / "site.json").write_text('{"title":"Test site"}', encoding="utf-8")

    templates = tmp_path / "src" / "templates"
    (templates / "partials").mkdir(parents=True)
    (templates / "page.hbs").write_text(PAGE_TEMPLATE, encoding="utf-8")
    (templates / "post.hbs").write_text(POST_TEMPLATE, encoding="utf-8")

    content = tmp_path / "build" / "content"
    (content / "pages").mkdir(parents=True)
    (content / "posts").mkdir(parents=True)

    return tmp_path


@pytest.fixture
def empty_site(tmp_path: Path) -> Path:
    """A site root holding nothing but site.json."""
    (tmp_path / "site.json").write_text('{"title":"Test site"}', encoding="utf-8")
    return tmp_path


def write_item(root: Path, section: str, name: str, **fields: Any) -> Path:
    """Write a content descriptor to ``build/content/<section>/<name>.json``."""
    path = root / "build" / "content" / section / f"{name}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(fields), encoding="utf-8")
    return path


def output_files(root: Path) -> list[Path]:
    """All files under build/ except the content descriptors."""
    build = root / "build"
    if not build.is_dir():
        return []
    content = build / "content"
    return sorted(
        p for p in build.rglob("*")
        if p.is_file() and content not in p.parents
    )


class StubError(Exception):
    """Error raised by stub collaborators."""


class StubDiscovery:
    """Discovery primitive returning fixed paths, or raising *error*."""

    def __init__(
        self,
        paths: Sequence[Path] = (),
        error: BaseException | None = None,
    ) -> None:
        self.paths = list(paths)
        self.error = error
        self.calls: list[list[str]] = []

    async def __call__(self, patterns: Sequence[str], *, cwd: Path) -> list[Path]:
        self.calls.append(list(patterns))
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return list(self.paths)


class StubFileSystem:
    """In-memory filesystem primitives.

    ``files`` maps paths to text; reads of unknown paths return *default*
    when given, else raise ``FileNotFoundError``.  Writes land in
    ``written`` unless *write_error* is set, in which case it is raised.
    """

    def __init__(
        self,
        files: dict[Path, str] | None = None,
        *,
        default: str | None = None,
        write_error: BaseException | None = None,
        read_delay: float = 0.0,
    ) -> None:
        self.files = dict(files or {})
        self.default = default
        self.write_error = write_error
        self.read_delay = read_delay
        self.written: dict[Path, str] = {}
        self.dirs: list[Path] = []
        self.reads: list[Path] = []
        self.active_reads = 0
        self.max_active_reads = 0

    async def read_text(self, path: Path) -> str:
        self.reads.append(path)
        self.active_reads += 1
        self.max_active_reads = max(self.max_active_reads, self.active_reads)
        try:
            await asyncio.sleep(self.read_delay)
        finally:
            self.active_reads -= 1
        if path in self.files:
            return self.files[path]
        if self.default is not None:
            return self.default
        raise FileNotFoundError(str(path))

    async def write_text(self, path: Path, text: str) -> None:
        await asyncio.sleep(0)
        if self.write_error is not None:
            raise self.write_error
        self.written[path] = text

    async def make_dirs(self, path: Path) -> None:
        self.dirs.append(path)
