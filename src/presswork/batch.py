"""Fail-fast batch combinator for independent async tasks."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Iterable


async def gather_all[T](awaitables: Iterable[Awaitable[T]]) -> list[T]:
    """Run *awaitables* concurrently; return all results or raise the first failure.

    Every awaitable is scheduled before any is awaited.  The first exception
    to occur is raised as-is and no result list is returned after it.
    Siblings are not cancelled: tasks already in flight keep running and
    their side effects (e.g., written files) may still land.

    Results are in input order.  An empty input returns ``[]``.
    """
    tasks = [asyncio.ensure_future(aw) for aw in awaitables]
    if not tasks:
        return []
    return list(await asyncio.gather(*tasks))
