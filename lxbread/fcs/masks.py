from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass

from .keywords import MAX_PARAMETERS, parameter_key
from .values import parse_int_or

"""Per-parameter bit masks derived from declared ranges ($P<n>R).

mask = range - 1 for a positive range, else 0, capped at 0xFFFFFFFF (values
are 32 bits wide, so higher mask bits carry nothing). Each raw 32-bit value
is ANDed with its mask. This only lands on a clean bit boundary when the range
is a power of two; other ranges are applied as-is.
"""

__all__ = [
    "MASK_LIMIT",
    "ParameterMask",
]

MASK_LIMIT = 0xFFFFFFFF


@dataclass(frozen=True)
class ParameterMask:
    """Mask values for parameters 1..N (index 0..N-1).

    Built fresh for every file and passed explicitly to the decoder.
    """
    values: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.values) > MAX_PARAMETERS:
            raise ValueError(
                f"mask holds {len(self.values)} parameters (max {MAX_PARAMETERS})"
            )
        for value in self.values:
            if not 0 <= value <= MASK_LIMIT:
                raise ValueError(f"mask value {value} outside 0..{MASK_LIMIT:#x}")

    @classmethod
    def from_metadata(cls, metadata: Mapping[str, str], parameter_count: int) -> ParameterMask:
        """Derive masks for ``parameter_count`` parameters from ``metadata``.

        Absent, non-integer and non-positive ranges give a mask of 0; ranges
        beyond 2**32 give MASK_LIMIT.
        """
        masks: list[int] = []
        for number in range(1, parameter_count + 1):
            declared = parse_int_or(metadata.get(parameter_key(number, "R")), 0)
            masks.append(min(declared - 1, MASK_LIMIT) if declared > 0 else 0)
        return cls(tuple(masks))

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> int:
        return self.values[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self.values)
