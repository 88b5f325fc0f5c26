from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from lxbread.models.error_record import ErrorRecord

"""Error log buffering.

Records are kept in memory during the run and written once as JSON Lines to
``<log_dir>/errors-YYYYMMDD-HHMMSS.log`` (UTC). Nothing is created when no
error occurred.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

DEFAULT_LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """In-memory buffer for error records. Flush appends JSON Lines.

    - file path is fixed on first access
    - single-threaded use only
    """
    def __init__(self, log_dir: Path = DEFAULT_LOGS_DIR) -> None:
        self.log_dir = log_dir
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self.log_dir / f"errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:
        return len(self._records)

    def counts_by_type(self) -> dict[str, int]:
        """Buffered records per ``error_type``, most frequent first."""
        return dict(Counter(r.error_type for r in self._records).most_common())

    def flush(self) -> Path | None:
        """Write buffered records and clear the buffer.

        Returns:
            Path written to, or None when there was nothing to write
        """
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
