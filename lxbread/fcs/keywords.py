from __future__ import annotations

"""TEXT segment keyword names used by the decoder."""

__all__ = [
    "MAX_PARAMETERS",
    "PAR",
    "TOT",
    "DATATYPE",
    "MODE",
    "BYTEORD",
    "UNICODE",
    "parameter_key",
]

MAX_PARAMETERS = 99

PAR = "$PAR"
TOT = "$TOT"
DATATYPE = "$DATATYPE"
MODE = "$MODE"
BYTEORD = "$BYTEORD"
UNICODE = "$UNICODE"


def parameter_key(number: int, suffix: str) -> str:
    """Build a per-parameter keyword, e.g. ``parameter_key(3, "R") -> "$P3R"``.

    Args:
        number: 1-based parameter number
        suffix: keyword suffix (B bits, R range, S label, N short name)
    """
    return f"$P{number}{suffix}"
