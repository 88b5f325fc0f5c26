from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""LxbFile domain model and FileStatus enum.

LxbFile is the outcome of processing one input file.
"""

__all__ = [
    "FileStatus",
    "LxbFile",
]


class FileStatus(Enum):
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class LxbFile:
    """Processing outcome for a single LXB file."""
    path: Path                          # Full path to the file
    name: str                           # File name
    status: FileStatus
    start_time: datetime | None = None  # Processing start (UTC)
    end_time: datetime | None = None    # Processing end (UTC)
    parameter_count: int = 0            # Validated $PAR (0 when rejected)
    total_rows: int = 0                 # Rows written
    warnings: tuple[str, ...] = ()      # Non-fatal diagnostics
    error_type: str | None = None       # UPPER_SNAKE failure classification
    error: str | None = None            # Failure reason summary

    @property
    def elapsed_seconds(self) -> float:
        if self.start_time is None or self.end_time is None:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()
