"""Default filesystem and discovery primitives.

Both run their blocking calls through ``asyncio.to_thread`` so that every
read, write, and directory scan is a suspension point for the event loop.
Read and write errors are raised unchanged (``FileNotFoundError`` and
friends); the pipelines never rewrap them.
"""

from __future__ import annotations

import asyncio
import fnmatch
import os
from pathlib import Path
from typing import TYPE_CHECKING

from presswork._errors import DiscoveryError

if TYPE_CHECKING:
    from collections.abc import Sequence


class LocalFileSystem:
    """Async wrappers over ``pathlib`` reads, writes, and mkdir."""

    async def read_text(self, path: Path) -> str:
        return await asyncio.to_thread(path.read_text, encoding="utf-8")

    async def write_text(self, path: Path, text: str) -> None:
        # Bytes, not text mode: no newline translation, so output is
        # byte-identical across runs and platforms.
        await asyncio.to_thread(path.write_bytes, text.encode("utf-8"))

    async def make_dirs(self, path: Path) -> None:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)


class GlobDiscovery:
    """Glob-style discovery of files relative to a working directory.

    Each pattern is a directory path followed by a wildcard file name
    (``build/content/posts/*.json``); wildcards in directory components are
    not expanded.  A directory that does not exist contributes no paths.
    Hidden files only match patterns that start with a dot.  Results are
    sorted per pattern.

    Raises:
        DiscoveryError: If a directory exists but cannot be scanned.

    """

    async def __call__(self, patterns: Sequence[str], *, cwd: Path) -> list[Path]:
        return await asyncio.to_thread(self._scan, tuple(patterns), cwd)

    @staticmethod
    def _scan(patterns: tuple[str, ...], cwd: Path) -> list[Path]:
        found: list[Path] = []
        for pattern in patterns:
            directory, _, name = pattern.rpartition("/")
            found.extend(sorted(_matching_files(cwd / directory, name)))
        return found


def _matching_files(directory: Path, name: str) -> list[Path]:
    # glob.glob() ignores scandir errors, so the directory is listed here
    # to tell a missing directory from an unreadable one.
    try:
        with os.scandir(directory) as entries:
            return [
                directory / entry.name
                for entry in entries
                if fnmatch.fnmatchcase(entry.name, name)
                and (name.startswith(".") or not entry.name.startswith("."))
                and entry.is_file()
            ]
    except (FileNotFoundError, NotADirectoryError):
        return []
    except OSError as exc:
        msg = f"Cannot scan {directory}: {exc}"
        raise DiscoveryError(msg) from exc
