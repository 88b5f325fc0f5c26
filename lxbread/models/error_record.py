from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

``parameter`` is the 1-based parameter number the failure refers to, or -1
for file-level failures (bad header, missing segment, unsupported mode...).
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: file name being decoded
        stage: decode stage (read/header/text/format/data)
        parameter: 1-based parameter number, -1 when not parameter-specific
        error_type: classification in UPPER_SNAKE_CASE
        message: human readable diagnostic
    """
    timestamp: str  # ISO8601 UTC
    file: str
    stage: str
    parameter: int  # 不明な場合 -1
    error_type: str  # UPPER_SNAKE
    message: str

    @staticmethod
    def create(file: str, stage: str, parameter: int, error_type: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            stage=stage,
            parameter=parameter,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to a single JSON line with exactly the dataclass fields."""
        return json.dumps(asdict(self), ensure_ascii=False)
