from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Processing result models: per-file statistics and the run aggregate."""


@dataclass(frozen=True)
class FileStat:
    """Per-file processing statistics."""
    file_name: str  # ファイル名
    status: str  # success/failed
    rows: int  # 出力行数
    elapsed_seconds: float
    error_type: str | None = None
    parameters: int = 0  # 検証済み $PAR
    warnings: int = 0  # 警告件数


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results for one run, source of the SUMMARY line."""
    success_files: int
    failed_files: int
    total_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float  # end - start
    throughput_rows_per_sec: float  # total_rows / elapsed
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files

    @property
    def any_success(self) -> bool:
        """True when at least one file was fully decoded."""
        return self.success_files > 0
