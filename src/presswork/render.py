"""Template rendering — Mustache/Handlebars-style templates via chevron.

The renderer is a pure function of template source and context.  It
supports the subset of Handlebars the site templates use: ``{{a.b}}``
(escaped), ``{{{a.b}}}`` (raw), sections, and ``{{> partial}}``.
"""

from __future__ import annotations

from pathlib import Path

import chevron

from presswork._errors import TemplateError
from presswork._types import RenderContext

# Partial files are looked up as <partials_path>/<name>.hbs
_PARTIALS_EXT = "hbs"


class MustacheRenderer:
    """Render template sources with chevron.

    Args:
        partials_path: Directory that ``{{> name}}`` partials resolve from.
            A missing directory simply renders partials as empty.

    """

    __slots__ = ("_partials_path",)

    def __init__(self, partials_path: Path | None = None) -> None:
        self._partials_path = partials_path

    def __call__(self, source: str, context: RenderContext) -> str:
        try:
            return chevron.render(
                source,
                dict(context),
                partials_path=str(self._partials_path or "."),
                partials_ext=_PARTIALS_EXT,
            )
        except chevron.ChevronError as exc:
            msg = f"Cannot render template: {exc}"
            raise TemplateError(msg) from exc
