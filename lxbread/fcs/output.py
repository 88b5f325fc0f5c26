from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import TextIO

from .decoder import Row
from .keywords import parameter_key

"""Text rendering of decoded files.

Header line: ``label(range), label(range), ...``
Data lines: masked values separated by tabs.
"""

__all__ = [
    "channel_label",
    "channel_labels",
    "format_header",
    "format_row",
    "RowWriter",
]


def channel_label(metadata: Mapping[str, str], number: int) -> str:
    """Label for parameter ``number``: $P<n>S, else $P<n>N, else empty."""
    label = metadata.get(parameter_key(number, "S"))
    if label is None:
        label = metadata.get(parameter_key(number, "N"), "")
    return label


def channel_labels(metadata: Mapping[str, str], parameter_count: int) -> list[str]:
    return [channel_label(metadata, n) for n in range(1, parameter_count + 1)]


def format_header(metadata: Mapping[str, str], parameter_count: int) -> str:
    """Render the channel header, e.g. ``"FL1(256), FL2(1024)"``.

    The range is printed as declared in the TEXT segment.
    """
    return ", ".join(
        f"{channel_label(metadata, n)}({metadata.get(parameter_key(n, 'R'), '')})"
        for n in range(1, parameter_count + 1)
    )


def format_row(row: Row) -> str:
    return "\t".join(str(v) for v in row)


class RowWriter:
    """Writes the header once per run followed by data lines.

    Attributes:
        header_written: True once the header line has been emitted
    """

    def __init__(self, stream: TextIO, *, header_prefix: str = "") -> None:
        self.stream = stream
        self.header_prefix = header_prefix
        self.header_written = False

    def write_header(self, metadata: Mapping[str, str], parameter_count: int) -> bool:
        """Write the header unless already written. Returns True if written."""
        if self.header_written:
            return False
        self.stream.write(f"{self.header_prefix}{format_header(metadata, parameter_count)}\n")
        self.header_written = True
        return True

    def write_rows(self, rows: Iterable[Row]) -> int:
        """Write rows and return how many were written."""
        count = 0
        for row in rows:
            self.stream.write(format_row(row) + "\n")
            count += 1
        return count
