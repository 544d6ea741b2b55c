"""Shared type definitions for presswork."""

from collections.abc import Awaitable, Callable, Mapping, Sequence
from pathlib import Path
from typing import Any, Literal, Protocol

# Content subdirectory name (e.g., "pages", "posts")
type Section = str

# Template identifier, relative to the templates directory (e.g., "page.hbs")
type TemplateName = str

# Context handed to a template render call
type RenderContext = Mapping[str, Any]

# Pipeline name, used in events and summaries
type PipelineName = Literal["pages", "feed"]

# Completion callbacks for the run_* entry points
type DoneCallback = Callable[[], object]
type ErrorCallback = Callable[[BaseException], object]


class FileSystem(Protocol):
    """Async filesystem primitives used by the pipelines."""

    def read_text(self, path: Path) -> Awaitable[str]: ...

    def write_text(self, path: Path, text: str) -> Awaitable[None]: ...

    def make_dirs(self, path: Path) -> Awaitable[None]: ...


class Discoverer(Protocol):
    """Async glob-style discovery: patterns relative to *cwd* -> paths."""

    def __call__(self, patterns: Sequence[str], *, cwd: Path) -> Awaitable[list[Path]]: ...


class Renderer(Protocol):
    """Pure template render function: source + context -> HTML."""

    def __call__(self, source: str, context: RenderContext) -> str: ...
