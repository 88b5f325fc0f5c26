"""FCS3.0 / LXB decoding core."""

from .decoder import Row, decode_array, iter_rows
from .errors import LxbError
from .header import SegmentOffsets, parse_header
from .masks import ParameterMask
from .output import RowWriter, format_header, format_row
from .reader import DecodedFile, decode_buffer, read_lxb_file
from .text import parse_text_segment
from .validator import FormatCheck, validate_format

__all__ = [
    "DecodedFile",
    "FormatCheck",
    "LxbError",
    "ParameterMask",
    "Row",
    "RowWriter",
    "SegmentOffsets",
    "decode_array",
    "decode_buffer",
    "format_header",
    "format_row",
    "iter_rows",
    "parse_header",
    "parse_text_segment",
    "read_lxb_file",
    "validate_format",
]
