from __future__ import annotations

from dataclasses import dataclass

from .errors import BadMagicError, OffsetParseError, SegmentBoundsError, TooSmallError
from .values import IntegerParseError, parse_int

"""FCS3.0 HEADER segment parsing.

Layout of the fixed prefix (0-based byte positions):

- [0, 10): ASCII literal ``"FCS3.0    "``
- [10, 58): six 8-byte ASCII decimal fields, space padded on either side:
  TEXT begin/end, DATA begin/end, ANALYSIS begin/end
"""

__all__ = [
    "HEADER_SIZE",
    "MAGIC",
    "SegmentOffsets",
    "parse_header",
    "locate_segment",
]

HEADER_SIZE = 58
MAGIC = b"FCS3.0    "
FIELD_WIDTH = 8

_FIELD_NAMES = (
    "text_begin",
    "text_end",
    "data_begin",
    "data_end",
    "analysis_begin",
    "analysis_end",
)


@dataclass(frozen=True)
class SegmentOffsets:
    """Segment offsets declared in the header.

    ANALYSIS is parsed for completeness but never read.
    """
    text_begin: int
    text_end: int
    data_begin: int
    data_end: int
    analysis_begin: int
    analysis_end: int


def parse_header(buf: bytes) -> SegmentOffsets:
    """Parse the 58-byte header prefix of ``buf``.

    Args:
        buf: Full file contents

    Returns:
        SegmentOffsets holding the six declared offsets

    Raises:
        TooSmallError: buffer shorter than the header
        BadMagicError: first 10 bytes are not ``"FCS3.0    "``
        OffsetParseError: an offset field is not a decimal integer
    """
    if len(buf) < HEADER_SIZE:
        raise TooSmallError(f"header data is too small ({len(buf)})")

    if bytes(buf[: len(MAGIC)]) != MAGIC:
        raise BadMagicError("magic bytes do not match")

    values: dict[str, int] = {}
    for index, name in enumerate(_FIELD_NAMES):
        start = len(MAGIC) + index * FIELD_WIDTH
        raw = bytes(buf[start : start + FIELD_WIDTH])
        try:
            values[name] = parse_int(raw.decode("ascii"))
        except (UnicodeDecodeError, IntegerParseError) as e:
            raise OffsetParseError(
                f"failed to parse segment offset {name} at byte {start}: {raw!r}"
            ) from e
    return SegmentOffsets(**values)


def locate_segment(buf: bytes, begin: int, end: int, *, stage: str) -> memoryview:
    """Return a zero-copy view of ``buf[begin:end]`` after bounds checking.

    A usable segment is non-empty, starts after byte 0 and ends inside the
    buffer.

    Raises:
        SegmentBoundsError: the declared segment cannot be located
    """
    size = end - begin
    if not (size > 0 and begin > 0 and end <= len(buf)):
        raise SegmentBoundsError(
            f"could not locate {stage.upper()} segment "
            f"(begin={begin} end={end} file_size={len(buf)})",
            stage=stage,
        )
    return memoryview(buf)[begin:end]
