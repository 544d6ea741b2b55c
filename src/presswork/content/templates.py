"""Template resolver — load-once template sources keyed by identifier."""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import TYPE_CHECKING

from presswork._errors import TemplateError

if TYPE_CHECKING:
    from presswork._types import FileSystem, TemplateName


class TemplateResolver:
    """Resolve template identifiers to template source text.

    Sources are read from ``<templates_path>/<identifier>`` on first request
    and cached for the lifetime of the resolver, which is one build run.
    Concurrent first requests for the same identifier may both read the
    file; the loads are idempotent so the cache stays consistent.

    A missing template file raises whatever the filesystem raises (usually
    ``FileNotFoundError``); there is no fallback template.

    Args:
        templates_path: Directory holding the template files.
        fs: Filesystem primitives used to read them.

    """

    __slots__ = ("_cache", "_fs", "_templates_path")

    def __init__(self, templates_path: Path, fs: FileSystem) -> None:
        self._templates_path = templates_path
        self._fs = fs
        self._cache: dict[TemplateName, str] = {}

    async def get(self, name: TemplateName | None) -> str:
        """Return the source for template *name*, loading it if needed.

        Raises:
            TemplateError: If *name* is empty or escapes the templates directory.

        """
        path = self.path_for(name)
        cached = self._cache.get(name)  # type: ignore[arg-type]
        if cached is not None:
            return cached
        source = await self._fs.read_text(path)
        self._cache[name] = source  # type: ignore[index]
        return source

    def path_for(self, name: TemplateName | None) -> Path:
        """Filesystem path for template *name*."""
        if not name or not name.strip():
            msg = "Content item has no template"
            raise TemplateError(msg)
        relative = PurePosixPath(name)
        if relative.is_absolute() or ".." in relative.parts or "\\" in name:
            msg = f"Template {name!r} is outside the templates directory"
            raise TemplateError(msg)
        return self._templates_path / relative

    def __contains__(self, name: object) -> bool:
        return name in self._cache

    def __len__(self) -> int:
        return len(self._cache)
