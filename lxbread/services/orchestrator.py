from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from pathlib import Path

from ..fcs.errors import LxbError
from ..fcs.output import RowWriter
from ..fcs.reader import decode_buffer, read_lxb_file
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.lxb_file import FileStatus, LxbFile
from ..models.processing_result import FileStat, ProcessingResult
from .progress import ProgressTracker

"""Service orchestration for the LXB decoder.

Coordinates a run: decodes each file in turn, writes its rows, records
per-file failures and aggregates the run metrics. A failing file is logged
and skipped; it never stops the run.
"""

logger = logging.getLogger(__name__)


class ProcessingError(Exception):
    """Fatal error that prevents the run from starting."""
    pass


def scan_lxb_files(directory: Path, suffix: str = ".lxb") -> list[Path]:
    """Scan ``directory`` (non-recursive) for files ending in ``suffix``.

    Matching is case-insensitive and the result is sorted by name.

    Raises:
        ProcessingError: directory missing, not a directory or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    try:
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == suffix.lower()
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def process_all(
    file_paths: Sequence[Path],
    writer: RowWriter,
    error_log: ErrorLogBuffer | None = None,
) -> ProcessingResult:
    """Decode every file in ``file_paths`` and write its rows via ``writer``.

    Args:
        file_paths: input files, processed in order
        writer: destination for the header line and data rows
        error_log: buffer for per-file failures (flushed by the caller)

    Returns:
        ProcessingResult with aggregated metrics and file stats
    """
    start_time = datetime.now(UTC)
    if error_log is None:
        error_log = ErrorLogBuffer()

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_rows = 0
    total = len(file_paths)

    with ProgressTracker(file_paths) as progress:
        for index, file_path in enumerate(file_paths, start=1):
            progress.start_file(file_path)
            logger.info(f"Processing file [{index} of {total}]: {file_path}")

            file_result = _process_single_file(file_path, writer, error_log)

            if file_result.status == FileStatus.SUCCESS:
                success_count += 1
                total_rows += file_result.total_rows
            else:
                failed_count += 1

            progress.finish_file(
                file_path, success=file_result.status == FileStatus.SUCCESS, rows=total_rows
            )

            file_stats.append(
                FileStat(
                    file_name=file_result.name,
                    status=file_result.status.value,
                    rows=file_result.total_rows,
                    elapsed_seconds=file_result.elapsed_seconds,
                    error_type=file_result.error_type,
                    parameters=file_result.parameter_count,
                    warnings=len(file_result.warnings),
                )
            )

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_rows=total_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
    )


def _failed(
    file_path: Path,
    start_time: datetime,
    error_log: ErrorLogBuffer,
    *,
    stage: str,
    error_type: str,
    message: str,
    parameter: int = -1,
) -> LxbFile:
    logger.error(f"{file_path.name}: {message}")
    error_log.append(
        ErrorRecord.create(
            file=file_path.name,
            stage=stage,
            parameter=parameter,
            error_type=error_type,
            message=message,
        )
    )
    return LxbFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error_type=error_type,
        error=message,
    )


def _process_single_file(file_path: Path, writer: RowWriter, error_log: ErrorLogBuffer) -> LxbFile:
    """Decode one file and write its rows.

    The header and rows are only written once every check has passed, so a
    rejected file leaves no partial output behind.
    """
    start_time = datetime.now(UTC)

    try:
        buf = read_lxb_file(file_path)
    except OSError as e:
        return _failed(
            file_path, start_time, error_log,
            stage="read", error_type="READ_ERROR", message=f"Could not read file: {e}",
        )

    try:
        decoded = decode_buffer(buf)
    except LxbError as e:
        return _failed(
            file_path, start_time, error_log,
            stage=e.stage, error_type=e.error_type, message=str(e), parameter=e.parameter,
        )
    except Exception as e:
        logger.debug("unexpected decode failure file=%s", file_path, exc_info=True)
        return _failed(
            file_path, start_time, error_log,
            stage="file", error_type="UNEXPECTED_ERROR", message=str(e),
        )

    for warning in decoded.check.warnings:
        logger.warning(f"{file_path.name}: {warning}")

    writer.write_header(decoded.metadata, decoded.parameter_count)
    rows = writer.write_rows(decoded.rows())
    logger.debug(
        "file=%s parameters=%d declared_events=%d rows=%d",
        file_path.name,
        decoded.parameter_count,
        decoded.event_count,
        rows,
    )

    return LxbFile(
        path=file_path,
        name=file_path.name,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.SUCCESS,
        parameter_count=decoded.parameter_count,
        total_rows=rows,
        warnings=decoded.check.warnings,
    )
