"""Content layer — descriptors, loading, and template resolution.

Reads the JSON page and post descriptors of a site and resolves the
template sources they name.
"""

from presswork.content.item import ContentItem, parse_item
from presswork.content.loader import discover_content, load_item, load_items, load_site
from presswork.content.templates import TemplateResolver

__all__ = [
    "ContentItem",
    "TemplateResolver",
    "discover_content",
    "load_item",
    "load_items",
    "load_site",
    "parse_item",
]
