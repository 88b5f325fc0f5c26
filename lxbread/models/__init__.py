"""Domain models for the LXB decoder.

Per-file processing context, run aggregates and error log records.
"""

from .error_record import ErrorRecord
from .lxb_file import FileStatus, LxbFile
from .processing_result import FileStat, ProcessingResult

__all__ = [
    "ErrorRecord",
    # Processing models
    "FileStatus",
    "LxbFile",
    "FileStat",
    "ProcessingResult",
]
