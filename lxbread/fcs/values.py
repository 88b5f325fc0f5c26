from __future__ import annotations

import re

"""Strict integer parsing for header fields and TEXT values."""

__all__ = [
    "IntegerParseError",
    "parse_int",
    "parse_int_or",
]

# ASCII digits only: int() alone would also accept "1_000" and non-ASCII digits
_INT_PATTERN = re.compile(r"[+-]?[0-9]+")


class IntegerParseError(ValueError):
    """Raised when a field is not a base-10 integer."""


def parse_int(text: str) -> int:
    """Parse a base-10 integer, allowing surrounding whitespace.

    Args:
        text: Field value (header field or TEXT value)

    Returns:
        Parsed integer

    Raises:
        IntegerParseError: If the stripped text is not an optionally signed
            run of ASCII digits
    """
    stripped = text.strip(" \t\r\n\x00")
    if not _INT_PATTERN.fullmatch(stripped):
        raise IntegerParseError(f"not an integer: {text!r}")
    return int(stripped)


def parse_int_or(text: str | None, default: int) -> int:
    """Parse ``text`` or return ``default`` when absent or malformed."""
    if text is None:
        return default
    try:
        return parse_int(text)
    except IntegerParseError:
        return default
