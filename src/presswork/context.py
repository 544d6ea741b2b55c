"""Per-run build context.

A ``BuildContext`` is created at the start of every pipeline run and
threaded through the loader, the template resolver, and the compilers.
It owns everything that lives for exactly one run: the frozen config,
the collaborators, the template cache, and the event collector.  Nothing
is kept at module level, so two runs never share state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from presswork.config import PressworkConfig
from presswork.content.templates import TemplateResolver
from presswork.fs import GlobDiscovery, LocalFileSystem
from presswork.observability.collector import BuildCollector
from presswork.render import MustacheRenderer

if TYPE_CHECKING:
    from presswork._types import Discoverer, FileSystem, Renderer


@dataclass(slots=True)
class BuildContext:
    """Everything one pipeline run needs.

    Attributes:
        config: Frozen build configuration.
        fs: Filesystem primitives.
        discover: Glob-style discovery primitive.
        renderer: Template render function.
        collector: Event collector for this run.
        templates: Per-run template cache, bound to ``fs`` and ``config``.
        site: Site configuration, set once by ``load_site``.

    """

    config: PressworkConfig
    fs: FileSystem
    discover: Discoverer
    renderer: Renderer
    collector: BuildCollector
    templates: TemplateResolver = field(init=False)
    site: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.templates = TemplateResolver(self.config.templates_path, self.fs)

    @classmethod
    def create(
        cls,
        root: str | Path | None = None,
        *,
        config: PressworkConfig | None = None,
        fs: FileSystem | None = None,
        discover: Discoverer | None = None,
        renderer: Renderer | None = None,
        collector: BuildCollector | None = None,
    ) -> BuildContext:
        """Build a context, filling in default collaborators.

        Either *root* or *config* must be given; *config* wins when both are.
        """
        if config is None:
            if root is None:
                msg = "BuildContext.create() needs a root or a config"
                raise TypeError(msg)
            config = PressworkConfig(root=Path(root))
        return cls(
            config=config,
            fs=fs if fs is not None else LocalFileSystem(),
            discover=discover if discover is not None else GlobDiscovery(),
            renderer=(
                renderer if renderer is not None
                else MustacheRenderer(config.partials_path)
            ),
            collector=collector if collector is not None else BuildCollector(),
        )
