"""Build collector — records loader and pipeline events into an event log.

Every pipeline run accepts an optional collector; when none is given a
fresh one with its own ``EventLog`` is created for the run.

Thread Safety:
    The collector delegates to ``EventLog`` which is internally locked.

"""

from __future__ import annotations

from presswork._types import PipelineName
from presswork.observability.events import (
    BuildEvent,
    BuildKind,
    ContentLoaded,
    RunCompleted,
    now_ns,
)
from presswork.observability.log import EventLog


class BuildCollector:
    """Event collector for content loading and compile pipelines.

    Args:
        log: The EventLog to store events in.

    """

    __slots__ = ("_log",)

    def __init__(self, log: EventLog | None = None) -> None:
        self._log = log if log is not None else EventLog()

    @property
    def log(self) -> EventLog:
        """The underlying event log."""
        return self._log

    def record_load(self, path: str, slug: str, *, load_ms: float = 0.0) -> None:
        """Record a content descriptor load."""
        self._log.append(
            ContentLoaded(path=path, slug=slug, load_ms=load_ms, timestamp_ns=now_ns())
        )

    def record_build(
        self,
        kind: BuildKind,
        source: str,
        target: str = "",
        *,
        duration_ms: float = 0.0,
    ) -> None:
        """Record a build pipeline event."""
        self._log.append(
            BuildEvent(
                kind=kind,
                source=source,
                target=target,
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )

    def record_run(
        self,
        pipeline: PipelineName,
        *,
        ok: bool,
        files_written: int = 0,
        skipped: int = 0,
        error: BaseException | None = None,
        duration_ms: float = 0.0,
    ) -> None:
        """Record the outcome of a pipeline run."""
        self._log.append(
            RunCompleted(
                pipeline=pipeline,
                ok=ok,
                files_written=files_written,
                skipped=skipped,
                error="" if error is None else repr(error),
                duration_ms=duration_ms,
                timestamp_ns=now_ns(),
            )
        )
