from __future__ import annotations

import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Run progress on stderr with tqdm (TTY only).

The bar is sized in bytes rather than files, since one LXB file can hold a
few hundred events or several million. stdout carries the decoded table and
is never written to.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """True if stderr is a TTY and progress should be displayed."""
    return sys.stderr.isatty()


def _file_size(path: Path) -> int:
    try:
        return path.stat().st_size
    except OSError:
        # unreadable files are reported by the read stage
        return 0


class ProgressTracker:
    """Byte-weighted progress over a batch of input files.

    Attributes:
        sizes: byte size per input file (0 when it cannot be stat'ed)
        succeeded / failed: per-file outcome counters
    """

    def __init__(self, files: Sequence[Path], *, description: str = "Decoding") -> None:
        self.description = description
        self.sizes = {p: _file_size(p) for p in files}
        self.total_bytes = sum(self.sizes.values())
        self.succeeded = 0
        self.failed = 0

        self.enabled = is_tty_enabled() and len(files) > 0
        self.pbar: TqdmType[Any] | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=self.total_bytes,
                desc=description,
                unit="B",
                unit_scale=True,
                unit_divisor=1024,
                file=sys.stderr,
                leave=False,
                dynamic_ncols=True,
            )

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} {file_path.name}")

    def finish_file(self, file_path: Path, *, success: bool, rows: int) -> None:
        """Advance by the file's size and refresh the counters.

        Args:
            file_path: file that was just processed
            success: whether it decoded
            rows: rows written so far in the run
        """
        if success:
            self.succeeded += 1
        else:
            self.failed += 1

        if self.pbar is not None:
            self.pbar.update(self.sizes.get(file_path, 0))
            self.pbar.set_postfix(ok=self.succeeded, failed=self.failed, rows=rows)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
