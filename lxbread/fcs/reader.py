from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from .decoder import Row, decode_array, event_count, iter_rows, to_dataframe
from .header import SegmentOffsets, locate_segment, parse_header
from .output import channel_labels
from .text import parse_text_segment
from .validator import FormatCheck, validate_format

"""LXB file reader: raw bytes -> validated, decodable file.

Pipeline: header -> TEXT bounds -> TEXT parse -> format validation (mask) ->
DATA bounds. Rows are only produced when the caller iterates, so a file
that fails any step never emits output.
"""

__all__ = [
    "DecodedFile",
    "read_lxb_file",
    "decode_buffer",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecodedFile:
    """A file that passed every structural and format check.

    Attributes:
        offsets: segment offsets from the header
        metadata: TEXT segment key/value pairs
        check: validation outcome (parameter count, mask, warnings)
        data: view of the DATA segment inside the caller's buffer
    """
    offsets: SegmentOffsets
    metadata: dict[str, str]
    check: FormatCheck
    data: memoryview

    @property
    def parameter_count(self) -> int:
        return self.check.parameter_count

    @property
    def event_count(self) -> int:
        return event_count(self.metadata)

    @property
    def labels(self) -> list[str]:
        return channel_labels(self.metadata, self.parameter_count)

    def rows(self) -> Iterator[Row]:
        """Fresh lazy row iterator over the DATA segment."""
        return iter_rows(self.data, self.parameter_count, self.event_count, self.check.mask)

    def to_array(self) -> np.ndarray:
        return decode_array(self.data, self.parameter_count, self.event_count, self.check.mask)

    def to_dataframe(self) -> pd.DataFrame:
        return to_dataframe(self.to_array(), self.labels)


def read_lxb_file(path: Path) -> bytes:
    """Load a whole file into memory.

    Raises:
        OSError: file cannot be read
    """
    return path.read_bytes()


def decode_buffer(buf: bytes) -> DecodedFile:
    """Run header, TEXT and format checks over ``buf``.

    Args:
        buf: full file contents

    Returns:
        DecodedFile ready for row iteration

    Raises:
        LxbError: any header, segment or format failure (see fcs.errors)
    """
    offsets = parse_header(buf)
    logger.debug("offsets=%s", offsets)

    text = locate_segment(buf, offsets.text_begin, offsets.text_end, stage="text")
    metadata = parse_text_segment(text)
    logger.debug("text keys=%d", len(metadata))

    check = validate_format(metadata)

    data = locate_segment(buf, offsets.data_begin, offsets.data_end, stage="data")
    return DecodedFile(offsets=offsets, metadata=metadata, check=check, data=data)
