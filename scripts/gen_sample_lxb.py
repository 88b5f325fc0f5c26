#!/usr/bin/env python3
"""Sample LXB file generator for manual and performance testing.

Writes FCS3.0 list-mode files the decoder accepts:
- 58-byte header with TEXT placed right after it and DATA right after TEXT
- '/' delimited TEXT with $PAR, $TOT, $DATATYPE=I, $MODE=L, $BYTEORD=1,2,3,4
  and per-channel $PnB=32, $PnR, $PnS
- little-endian int32 DATA with random values (some above the channel range,
  so masking is visible in the output)
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np

HEADER_SIZE = 58
MAGIC = b"FCS3.0    "
DEFAULT_RANGE = 1024


def build_text(events: int, params: int, ranges: list[int]) -> bytes:
    """Build a '/' delimited TEXT segment for ``params`` channels."""
    pairs: list[tuple[str, str]] = [
        ("$PAR", str(params)),
        ("$TOT", str(events)),
        ("$DATATYPE", "I"),
        ("$MODE", "L"),
        ("$BYTEORD", "1,2,3,4"),
    ]
    for n in range(1, params + 1):
        pairs += [
            (f"$P{n}B", "32"),
            (f"$P{n}R", str(ranges[n - 1])),
            (f"$P{n}S", f"FL{n}"),
        ]
    body = "".join(f"{k}/{v}/" for k, v in pairs)
    return ("/" + body).encode("latin-1")


def build_lxb(events: int, params: int, ranges: list[int], seed: int = 42) -> bytes:
    """Assemble a complete file image.

    Args:
        events: number of records to write (and declare in $TOT)
        params: channels per record
        ranges: $PnR value for each channel
        seed: random seed for reproducible data

    Returns:
        File contents
    """
    rng = np.random.default_rng(seed)
    data = rng.integers(0, 4 * max(ranges), size=(events, params), dtype="<i4").tobytes()

    text = build_text(events, params, ranges)
    text_begin = HEADER_SIZE
    text_end = text_begin + len(text)
    data_begin = text_end
    data_end = data_begin + len(data)
    offsets = (text_begin, text_end, data_begin, data_end, 0, 0)
    header = MAGIC + b"".join(f"{n:>8}".encode("ascii") for n in offsets)
    return header + text + data


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic LXB (FCS3.0) files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # 10k events, 4 channels
  %(prog)s data/sample.lxb --events 10000 --params 4

  # 3 files, custom channel ranges
  %(prog)s data/well.lxb --count 3 --params 2 --ranges 256 1024
        """,
    )
    parser.add_argument("output", type=Path, help="Output file path")
    parser.add_argument("--events", type=int, default=10_000, help="Records per file (default: 10,000)")
    parser.add_argument("--params", type=int, default=4, help="Channels per record (default: 4)")
    parser.add_argument("--ranges", type=int, nargs="+", default=None, help="$PnR per channel (default: 1024)")
    parser.add_argument("--count", type=int, default=1, help="Number of files; >1 appends _1, _2, ... (default: 1)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.events < 0:
        print("Error: --events must not be negative", file=sys.stderr)
        return 1
    if not 1 <= args.params <= 99:
        print("Error: --params must be between 1 and 99", file=sys.stderr)
        return 1

    ranges = args.ranges or [DEFAULT_RANGE] * args.params
    if len(ranges) != args.params:
        print("Error: --ranges needs one value per channel", file=sys.stderr)
        return 1

    args.output.parent.mkdir(parents=True, exist_ok=True)
    for i in range(args.count):
        path = args.output
        if args.count > 1:
            path = args.output.with_name(f"{args.output.stem}_{i + 1}{args.output.suffix}")
        content = build_lxb(args.events, args.params, ranges, seed=args.seed + i)
        path.write_bytes(content)
        print(f"Created LXB file: {path} ({args.events:,} events, {args.params} channels, {len(content):,} bytes)")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
