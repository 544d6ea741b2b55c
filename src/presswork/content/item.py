"""Content items — the unit of compilation.

A ``ContentItem`` is built from one parsed JSON descriptor.  Fields the
descriptor does not set are ``None`` rather than ``""`` so the draft and
date filters can tell "absent" from "empty".
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Any

from presswork._errors import LoadError

DRAFT_STATUS = "draft"


@dataclass(frozen=True, slots=True)
class ContentItem:
    """A page or post descriptor.

    Attributes:
        slug: Unique path the output location is derived from.  Only items
            that are written out need one.
        title: Item title.
        body: Pre-rendered HTML fragment.
        template: Template identifier (e.g., ``"post.hbs"``).
        date: ISO date string; posts carry one, pages usually don't.
        status: Publication status; ``"draft"`` excludes the item.
        tags: Whitespace-separated tag tokens.
        source: Descriptor file the item was loaded from.
        fields: The raw parsed descriptor, including keys presswork ignores.

    """

    slug: str | None = None
    title: str | None = None
    body: str | None = None
    template: str | None = None
    date: str | None = None
    status: str | None = None
    tags: str | None = None
    source: Path | None = None
    fields: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_mapping(cls, data: object, source: Path | None = None) -> ContentItem:
        """Build an item from a parsed descriptor.

        Raises:
            LoadError: If *data* is not a JSON object.

        """
        where = f" in {source}" if source is not None else ""
        if not isinstance(data, Mapping):
            msg = f"Content descriptor{where} must be a JSON object, got {type(data).__name__}"
            raise LoadError(msg)
        return cls(
            slug=_optional_str(data.get("slug")),
            title=_optional_str(data.get("title")),
            body=_optional_str(data.get("body")),
            template=_optional_str(data.get("template")),
            date=_optional_str(data.get("date")),
            status=_optional_str(data.get("status")),
            tags=_tags_str(data.get("tags")),
            source=source,
            fields=dict(data),
        )

    @property
    def is_draft(self) -> bool:
        return self.status == DRAFT_STATUS

    @property
    def tag_list(self) -> list[str]:
        """Tag tokens in the order they appear."""
        if self.tags is None:
            return []
        return self.tags.split()

    @property
    def template_stem(self) -> str:
        """Template identifier without directories or extension."""
        if not self.template:
            return ""
        return PurePosixPath(self.template).stem

    def as_context(self) -> dict[str, Any]:
        """Template-facing view: raw fields overlaid with normalized ones.

        Absent fields are left out entirely so templates see them as missing.
        """
        context = {k: v for k, v in self.fields.items() if v is not None}
        for name in ("slug", "title", "body", "template", "date", "status", "tags"):
            value = getattr(self, name)
            if value is None:
                context.pop(name, None)
            else:
                context[name] = value
        return context


def parse_item(text: str, source: Path | None = None) -> ContentItem:
    """Parse descriptor JSON text into a ``ContentItem``.

    Raises:
        LoadError: On invalid JSON or an invalid descriptor.

    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        where = f" {source}" if source is not None else ""
        msg = f"Invalid JSON in content descriptor{where}: {exc}"
        raise LoadError(msg) from exc
    return ContentItem.from_mapping(data, source)


def _optional_str(value: object) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _tags_str(value: object) -> str | None:
    # Descriptors written by hand sometimes list tags instead of a string
    if isinstance(value, (list, tuple)):
        return " ".join(str(tag) for tag in value)
    return _optional_str(value)
