from __future__ import annotations

import struct
from collections.abc import Iterator, Mapping, Sequence

import numpy as np
import pandas as pd

from .keywords import TOT
from .masks import ParameterMask
from .values import parse_int_or

"""DATA segment decoding.

The DATA segment is a run of records, each $PAR little-endian signed 32-bit
integers. Decoding stops after $TOT records or when the next record would not
fit in the segment, whichever comes first.
"""

__all__ = [
    "VALUE_SIZE",
    "Row",
    "event_count",
    "record_count",
    "iter_rows",
    "decode_array",
    "to_dataframe",
]

VALUE_SIZE = 4

Row = tuple[int, ...]


def event_count(metadata: Mapping[str, str]) -> int:
    """Declared $TOT; absent, malformed or negative counts decode as 0 events."""
    return max(parse_int_or(metadata.get(TOT), 0), 0)


def record_count(segment_size: int, parameter_count: int, events: int) -> int:
    """Number of rows decodable: min($TOT, whole records in the segment)."""
    record_size = parameter_count * VALUE_SIZE
    if record_size <= 0:
        return 0
    return max(min(events, segment_size // record_size), 0)


def iter_rows(
    segment: bytes | memoryview,
    parameter_count: int,
    events: int,
    mask: ParameterMask,
) -> Iterator[Row]:
    """Lazily yield masked rows from a DATA segment.

    Args:
        segment: DATA segment bytes
        parameter_count: values per record ($PAR)
        events: declared event count ($TOT)
        mask: per-parameter masks, one per value

    Yields:
        One tuple of ``parameter_count`` masked ints per record
    """
    record = struct.Struct(f"<{parameter_count}i")
    masks = tuple(mask)
    view = memoryview(segment)
    offset = 0
    for _ in range(record_count(len(view), parameter_count, events)):
        values = record.unpack_from(view, offset)
        offset += record.size
        yield tuple(value & m for value, m in zip(values, masks))


def decode_array(
    segment: bytes | memoryview,
    parameter_count: int,
    events: int,
    mask: ParameterMask,
) -> np.ndarray:
    """Decode all records at once into an (events, parameters) int64 array.

    Same row count and masking as :func:`iter_rows`.
    """
    rows = record_count(len(segment), parameter_count, events)
    raw = np.frombuffer(segment, dtype="<i4", count=rows * parameter_count)
    # int64 so that masks above 2**31-1 don't overflow
    data = raw.astype(np.int64).reshape(rows, parameter_count)
    return data & np.asarray(mask.values, dtype=np.int64)


def to_dataframe(data: np.ndarray, labels: Sequence[str]) -> pd.DataFrame:
    """Wrap a decoded array in a DataFrame whose columns are channel labels."""
    return pd.DataFrame(data, columns=list(labels))
