from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from .errors import (
    TooManyParametersError,
    UnsupportedBitWidthError,
    UnsupportedByteOrderError,
    UnsupportedDatatypeError,
    UnsupportedModeError,
)
from .keywords import BYTEORD, DATATYPE, MAX_PARAMETERS, MODE, PAR, UNICODE, parameter_key
from .masks import ParameterMask
from .values import IntegerParseError, parse_int

"""Validation of TEXT metadata against the supported FCS3.0 subset.

Supported: integer data ($DATATYPE=I), list mode ($MODE=L), little-endian
($BYTEORD=1,2,3,4), 32-bit parameters, at most 99 parameters.

Checks run in a fixed order and the first failure is raised. $UNICODE only
produces a warning on the returned FormatCheck.
"""

__all__ = [
    "LITTLE_ENDIAN",
    "SUPPORTED_BITS",
    "FormatCheck",
    "validate_format",
]

LITTLE_ENDIAN = "1,2,3,4"
SUPPORTED_BITS = 32


@dataclass(frozen=True)
class FormatCheck:
    """Outcome of a successful validation.

    Attributes:
        parameter_count: validated $PAR
        mask: per-parameter masks for this file
        warnings: non-fatal diagnostics (e.g. $UNICODE present)
    """
    parameter_count: int
    mask: ParameterMask
    warnings: tuple[str, ...] = field(default_factory=tuple)


def _parameter_count(metadata: Mapping[str, str]) -> int:
    raw = metadata.get(PAR, "")
    try:
        count = parse_int(raw)
    except IntegerParseError as e:
        raise TooManyParametersError(
            f"Invalid parameter count: not an integer (must be 1..{MAX_PARAMETERS}; {PAR}={raw})"
        ) from e
    if count > MAX_PARAMETERS:
        raise TooManyParametersError(f"Too many parameters: {count} (max {MAX_PARAMETERS})")
    if count < 1:
        raise TooManyParametersError(
            f"Invalid parameter count: {count} (must be 1..{MAX_PARAMETERS}; {PAR}={raw})"
        )
    return count


def validate_format(metadata: Mapping[str, str]) -> FormatCheck:
    """Validate ``metadata`` and derive the parameter mask.

    Args:
        metadata: parsed TEXT segment

    Returns:
        FormatCheck with the parameter count, mask and any warnings

    Raises:
        TooManyParametersError: $PAR missing, not an integer, < 1 or > 99
        UnsupportedDatatypeError: $DATATYPE is not I
        UnsupportedModeError: $MODE is not L
        UnsupportedByteOrderError: $BYTEORD is not 1,2,3,4
        UnsupportedBitWidthError: first parameter whose $P<n>B is not 32
    """
    npar = _parameter_count(metadata)

    data_type = metadata.get(DATATYPE, "")
    if data_type.upper() != "I":
        raise UnsupportedDatatypeError(f"Data is not integral ({DATATYPE}={data_type})")

    mode = metadata.get(MODE, "")
    if mode.upper() != "L":
        raise UnsupportedModeError(f"Data not in list format ({MODE}={mode})")

    byte_order = metadata.get(BYTEORD, "")
    if byte_order != LITTLE_ENDIAN:
        raise UnsupportedByteOrderError(
            f"Data not in little endian format ({BYTEORD}={byte_order})"
        )

    warnings: list[str] = []
    unicode_flag = metadata.get(UNICODE)
    if unicode_flag:
        warnings.append(
            f"{UNICODE}={unicode_flag} is set; non-ASCII metadata may be decoded incorrectly"
        )

    mask = ParameterMask.from_metadata(metadata, npar)

    for number in range(1, npar + 1):
        key = parameter_key(number, "B")
        raw = metadata.get(key, "")
        try:
            bits = parse_int(raw)
        except IntegerParseError:
            bits = None
        if bits != SUPPORTED_BITS:
            raise UnsupportedBitWidthError(
                f"Parameter {number} is not {SUPPORTED_BITS} bits ({key}={raw})",
                parameter=number,
            )

    return FormatCheck(parameter_count=npar, mask=mask, warnings=tuple(warnings))
