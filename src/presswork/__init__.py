"""Presswork — compile JSON content into static pages and an RSS feed.

Reads page and post descriptors from ``build/content/{pages,posts}/*.json``,
renders each through the template it names, and writes
``build/<slug>/index.html`` plus ``build/rss.xml``.

Quick start::

    import presswork

    presswork.build("my-site/")

Async pipelines, with injectable collaborators::

    await presswork.compile_pages("my-site/")
    await presswork.compile_feed("my-site/")

Completion callbacks::

    presswork.run_pages("my-site/", on_done, on_error)
    presswork.run_feed("my-site/", on_done, on_error)

"""

__version__ = "0.1.0"
__all__ = [
    "PressworkConfig",
    "__version__",
    "build",
    "compile_feed",
    "compile_pages",
    "run_feed",
    "run_pages",
]


def __getattr__(name: str) -> object:
    """Lazy imports for the public API.

    Keeps ``import presswork`` fast while providing a clean top-level API.
    """
    if name == "PressworkConfig":
        from presswork.config import PressworkConfig

        return PressworkConfig

    if name in ("build", "run_pages", "run_feed"):
        from presswork import app

        return getattr(app, name)

    if name == "compile_pages":
        from presswork.export.pages import compile_pages

        return compile_pages

    if name == "compile_feed":
        from presswork.export.feed import compile_feed

        return compile_feed

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
