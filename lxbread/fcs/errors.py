from __future__ import annotations

"""Exception taxonomy for LXB (FCS3.0) decoding.

Every fatal condition aborts processing of the current file only. Each
exception carries:

- ``error_type``: UPPER_SNAKE classification written to the error log
- ``stage``: which part of the file was being decoded (header/text/format/data)
- ``parameter``: 1-based parameter number, or -1 when not parameter-specific

The orchestrator catches ``LxbError`` and records it; nothing here crosses a
file boundary.
"""

__all__ = [
    "LxbError",
    "HeaderError",
    "TooSmallError",
    "BadMagicError",
    "OffsetParseError",
    "SegmentBoundsError",
    "SegmentTooSmallError",
    "FormatError",
    "TooManyParametersError",
    "UnsupportedDatatypeError",
    "UnsupportedModeError",
    "UnsupportedByteOrderError",
    "UnsupportedBitWidthError",
]


class LxbError(Exception):
    """Base class for all per-file decode failures."""

    error_type = "LXB_ERROR"
    stage = "file"

    def __init__(self, message: str, *, parameter: int = -1) -> None:
        super().__init__(message)
        self.parameter = parameter


class HeaderError(LxbError):
    """Raised when the fixed 58-byte header cannot be parsed."""

    stage = "header"


class TooSmallError(HeaderError):
    error_type = "TOO_SMALL"


class BadMagicError(HeaderError):
    error_type = "BAD_MAGIC"


class OffsetParseError(HeaderError):
    error_type = "OFFSET_PARSE_ERROR"


class SegmentBoundsError(LxbError):
    """Raised when a TEXT or DATA segment does not lie inside the buffer."""

    error_type = "SEGMENT_OUT_OF_BOUNDS"

    def __init__(self, message: str, *, stage: str) -> None:
        super().__init__(message)
        self.stage = stage


class SegmentTooSmallError(LxbError):
    error_type = "SEGMENT_TOO_SMALL"
    stage = "text"


class FormatError(LxbError):
    """Raised when TEXT metadata falls outside the supported FCS3.0 subset."""

    stage = "format"


class TooManyParametersError(FormatError):
    """$PAR outside 1..99: above the ceiling, zero, negative or not a number."""

    error_type = "TOO_MANY_PARAMETERS"


class UnsupportedDatatypeError(FormatError):
    error_type = "UNSUPPORTED_DATATYPE"


class UnsupportedModeError(FormatError):
    error_type = "UNSUPPORTED_MODE"


class UnsupportedByteOrderError(FormatError):
    error_type = "UNSUPPORTED_BYTE_ORDER"


class UnsupportedBitWidthError(FormatError):
    error_type = "UNSUPPORTED_BIT_WIDTH"
