"""Build observability — a unified event model for presswork runs.

Records events from:
- **Content loader**: descriptor reads and parses
- **Page/post compiler**: rendered pages and skipped drafts
- **Feed compiler**: the written feed document
- **Run entry points**: the outcome of each pipeline run

All events are frozen dataclasses with nanosecond timestamps.

Quick Start:
    >>> from presswork.observability import BuildCollector, EventLog
    >>> log = EventLog()
    >>> collector = BuildCollector(log)
    >>> # Pass collector to compile_pages(..., collector=collector)

"""

from presswork.observability.collector import BuildCollector
from presswork.observability.events import (
    BuildEvent,
    ContentLoaded,
    PressEvent,
    RunCompleted,
    now_ns,
)
from presswork.observability.log import EventLog

__all__ = [
    "BuildCollector",
    "BuildEvent",
    "ContentLoaded",
    "EventLog",
    "PressEvent",
    "RunCompleted",
    "now_ns",
]
