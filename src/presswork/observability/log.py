"""Build event log — a bounded, lock-protected record of one or more runs.

Holds the ``ContentLoaded``, ``BuildEvent`` and ``RunCompleted`` events a
``BuildCollector`` produces.  Once ``max_events`` is reached the oldest
entries fall off the front.

The lock matters only when a log is shared across threads (for example a
caller inspecting it while ``asyncio.to_thread`` workers run); a single
build appends from the event loop thread alone.
"""

import threading
from collections import Counter, deque
from collections.abc import Iterable
from typing import Any

from presswork.observability.events import PressEvent


def _event_path(event: PressEvent) -> str:
    """The file an event is about: a descriptor path or a build source."""
    return getattr(event, "path", None) or getattr(event, "source", None) or ""


class EventLog:
    """Ring buffer of build events with simple filtering.

    Args:
        max_events: Number of events kept before the oldest are dropped.

    """

    __slots__ = ("_events", "_lock", "_max_events")

    def __init__(self, max_events: int = 10_000) -> None:
        self._max_events = max_events
        self._events: deque[PressEvent] = deque(maxlen=max_events)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)

    def append(self, event: PressEvent) -> None:
        with self._lock:
            self._events.append(event)

    def append_many(self, events: Iterable[PressEvent]) -> None:
        with self._lock:
            self._events.extend(events)

    def _snapshot(self) -> list[PressEvent]:
        with self._lock:
            return list(self._events)

    def query(
        self,
        *,
        event_type: type | None = None,
        since_ns: int = 0,
        path: str | None = None,
        kind: str | None = None,
        limit: int = 100,
    ) -> list[PressEvent]:
        """Matching events, newest first.

        Args:
            event_type: Keep only instances of this event class.
            since_ns: Drop events stamped before this monotonic time.
            path: Keep events whose descriptor path or build source
                contains this substring.
            kind: Keep build events of this kind, e.g. ``"skip_draft"``.
            limit: Stop after this many matches.

        """
        matches: list[PressEvent] = []
        for event in reversed(self._snapshot()):
            if len(matches) >= limit:
                break
            if event_type is not None and not isinstance(event, event_type):
                continue
            if since_ns and event.timestamp_ns < since_ns:
                continue
            if path is not None and path not in _event_path(event):
                continue
            if kind is not None and getattr(event, "kind", None) != kind:
                continue
            matches.append(event)
        return matches

    def recent(self, n: int = 20) -> list[PressEvent]:
        """The last *n* events, oldest first."""
        return self._snapshot()[-n:]

    def clear(self) -> int:
        """Drop every event; return how many there were."""
        with self._lock:
            dropped = len(self._events)
            self._events.clear()
        return dropped

    def stats(self) -> dict[str, Any]:
        """Counts per event class and per build-event kind."""
        events = self._snapshot()
        by_type = Counter(type(event).__name__ for event in events)
        by_kind = Counter(
            event.kind for event in events if getattr(event, "kind", None)
        )
        return {
            "total": len(events),
            "max_events": self._max_events,
            "by_type": dict(by_type),
            "by_kind": dict(by_kind),
        }
