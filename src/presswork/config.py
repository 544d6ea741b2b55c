"""Presswork configuration.

PressworkConfig is the central configuration object, frozen after creation.
"""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PressworkConfig:
    """Configuration for a presswork build.

    Attributes:
        root: Path to the site root directory (contains site.json, src/, build/).
              Always resolved to an absolute path on construction.
        content_dir: Directory holding the JSON descriptors, one subdirectory
            per section.
        templates_dir: Directory holding the template sources.
        partials_dir: Partials directory, relative to ``templates_dir``.
        output: Output directory for compiled pages and the feed.
        site_file: Site configuration file, relative to root.
        sections: Content subdirectories to compile.
        feed_file: Feed file name inside the output directory.
        feed_limit: Maximum number of feed entries (0 = all).
        feed_template: Optional template identifier used to render the feed
            instead of the built-in RSS generator.
        base_url: Base URL for feed links.  Falls back to ``site.json``'s
            ``url`` key when empty.

    """

    root: Path = field(default_factory=Path.cwd)
    content_dir: str = "build/content"
    templates_dir: str = "src/templates"
    partials_dir: str = "partials"
    output: Path = field(default_factory=lambda: Path("build"))
    site_file: str = "site.json"
    sections: tuple[str, ...] = ("pages", "posts")
    feed_file: str = "rss.xml"
    feed_limit: int = 0
    feed_template: str | None = None
    base_url: str = ""

    def __post_init__(self) -> None:
        if not self.root.is_absolute():
            object.__setattr__(self, "root", self.root.resolve())

    @property
    def content_path(self) -> Path:
        """Absolute path to content directory."""
        return self.root / self.content_dir

    @property
    def templates_path(self) -> Path:
        """Absolute path to templates directory."""
        return self.root / self.templates_dir

    @property
    def partials_path(self) -> Path:
        """Absolute path to partial templates directory."""
        return self.templates_path / self.partials_dir

    @property
    def site_path(self) -> Path:
        """Absolute path to the site configuration file."""
        return self.root / self.site_file

    @property
    def output_path(self) -> Path:
        """Absolute path to output directory."""
        if self.output.is_absolute():
            return self.output
        return self.root / self.output

    @property
    def feed_path(self) -> Path:
        """Absolute path to the feed document."""
        return self.output_path / self.feed_file
