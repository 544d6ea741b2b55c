"""Unified event model for build observability.

Defines event types for the content loader and the two compile pipelines.

All events are frozen dataclasses with:
- ``timestamp_ns``: Monotonic nanosecond timestamp
- Descriptive fields for the specific event type

Thread Safety:
    All events are frozen (immutable) and safe to share across threads.

"""

import time
from dataclasses import dataclass
from typing import Literal

from presswork._types import PipelineName

type BuildKind = Literal["render_page", "skip_draft", "write_feed"]


# ---------------------------------------------------------------------------
# Content events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ContentLoaded:
    """A content descriptor was read and parsed.

    Attributes:
        path: Path to the descriptor file.
        slug: Slug of the parsed item.
        load_ms: Time spent reading and parsing in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    path: str
    slug: str
    load_ms: float
    timestamp_ns: int


# ---------------------------------------------------------------------------
# Build pipeline events
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class BuildEvent:
    """A build-pipeline action occurred.

    Attributes:
        kind: The type of build action.
        source: Source file path (or description).
        target: Output file path (empty for skipped items).
        duration_ms: Time taken in milliseconds.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    kind: BuildKind
    source: str
    target: str
    duration_ms: float
    timestamp_ns: int


@dataclass(frozen=True, slots=True)
class RunCompleted:
    """A pipeline run finished, successfully or not.

    Attributes:
        pipeline: Which pipeline ran.
        ok: False when the run failed.
        files_written: Number of files written by a successful run.
        skipped: Number of draft items skipped.
        error: ``repr`` of the failure, empty on success.
        duration_ms: Total wall-clock time of the run.
        timestamp_ns: Monotonic nanosecond timestamp.

    """

    pipeline: PipelineName
    ok: bool
    files_written: int
    skipped: int
    error: str
    duration_ms: float
    timestamp_ns: int


type PressEvent = ContentLoaded | BuildEvent | RunCompleted


def now_ns() -> int:
    """Return the current monotonic clock value in nanoseconds."""
    return time.monotonic_ns()
