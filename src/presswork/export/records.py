"""Result records for compile runs."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal


@dataclass(frozen=True, slots=True)
class ExportedFile:
    """Record of a single file written during a run.

    Attributes:
        source_path: Descriptor the file was compiled from (``"feed"`` for
            the feed document).
        output_path: Absolute filesystem path to the written file.
        source_type: Category of the exported file.
        size_bytes: Size of the written file in bytes.
        duration_ms: Time taken to load, render, and write this file.

    """

    source_path: str
    output_path: Path
    source_type: Literal["content", "feed"]
    size_bytes: int
    duration_ms: float


@dataclass(frozen=True, slots=True)
class ExportResult:
    """Aggregate result of one successful pipeline run.

    Attributes:
        files: All files written during the run.
        total_pages: Number of page/post files written.
        skipped: Number of draft items left out.
        duration_ms: Total wall-clock time for the run.
        output_dir: Absolute path to the output directory.

    """

    files: tuple[ExportedFile, ...]
    total_pages: int
    skipped: int
    duration_ms: float
    output_dir: Path
