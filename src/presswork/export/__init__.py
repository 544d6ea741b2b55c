"""Export layer — compiled pages and the feed.

Turns loaded content into output files: one HTML page per non-draft item
and a single RSS document of dated posts.
"""

from presswork.export.feed import FeedCompiler, compile_feed, generate_feed, select_entries
from presswork.export.pages import PageCompiler, body_class_for, build_page_context, compile_pages
from presswork.export.records import ExportedFile, ExportResult

__all__ = [
    "ExportResult",
    "ExportedFile",
    "FeedCompiler",
    "PageCompiler",
    "body_class_for",
    "build_page_context",
    "compile_feed",
    "compile_pages",
    "generate_feed",
    "select_entries",
]
