from __future__ import annotations

from .errors import SegmentTooSmallError

"""TEXT segment parsing.

The first byte of the segment is the delimiter; the rest is split on every
delimiter occurrence into alternating keys and values.

Known limitation: FCS allows a doubled delimiter to stand for one literal
delimiter inside a key or value. That escape is NOT handled here; every
delimiter byte is a split point, so such keys/values come out with wrong
boundaries. Handling it would change the key/value contract for any text
containing the delimiter, so it is left for a future format revision.
"""

__all__ = [
    "TEXT_ENCODING",
    "parse_text_segment",
]

# 1 byte -> 1 char, lossless for arbitrary bytes
TEXT_ENCODING = "latin-1"


def parse_text_segment(text: bytes | memoryview) -> dict[str, str]:
    """Parse a delimiter-framed TEXT segment into an ordered mapping.

    Args:
        text: TEXT segment bytes, first byte being the delimiter

    Returns:
        Keys and values in encounter order. Later duplicates overwrite
        earlier ones; a trailing key without a value is dropped.

    Raises:
        SegmentTooSmallError: fewer than 2 bytes
    """
    raw = bytes(text)
    if len(raw) < 2:
        raise SegmentTooSmallError(f"TEXT segment is too small ({len(raw)})")

    delimiter = raw[:1]
    tokens = raw[1:].split(delimiter)

    metadata: dict[str, str] = {}
    # zip() stops at the shorter slice -> unpaired trailing key is dropped
    for key, value in zip(tokens[0::2], tokens[1::2]):
        metadata[key.decode(TEXT_ENCODING)] = value.decode(TEXT_ENCODING)
    return metadata
