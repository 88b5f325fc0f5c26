from __future__ import annotations

import struct

import numpy as np
import pytest

from lxbread.fcs.decoder import decode_array, event_count, iter_rows, record_count, to_dataframe
from lxbread.fcs.masks import ParameterMask


def _pack(*values: int) -> bytes:
    return struct.pack(f"<{len(values)}i", *values)


def test_scenario_row_masked():
    rows = list(iter_rows(_pack(300, 2000), 2, 1, ParameterMask((255, 1023))))
    assert rows == [(300 & 255, 2000 & 1023)]
    assert rows == [(44, 976)]


def test_mask_keeps_only_low_bits():
    # 2000 = 0b11111010000; bit 10 is cleared by the 1023 mask
    rows = list(iter_rows(_pack(2000, 1024, 1023), 3, 1, ParameterMask((1023, 1023, 1023))))
    assert rows == [(976, 0, 1023)]


def test_rows_stop_at_declared_total():
    data = _pack(*range(12))
    rows = list(iter_rows(data, 3, 2, ParameterMask((0xFF, 0xFF, 0xFF))))
    assert rows == [(0, 1, 2), (3, 4, 5)]


def test_rows_stop_at_segment_end():
    # 10 values / 3 per record -> 3 whole records, trailing value ignored
    data = _pack(*range(10))
    rows = list(iter_rows(data, 3, 100, ParameterMask((0xFF, 0xFF, 0xFF))))
    assert rows == [(0, 1, 2), (3, 4, 5), (6, 7, 8)]


@pytest.mark.parametrize(
    ("size", "npar", "tot", "expected"),
    [
        (32, 2, 1, 1),
        (32, 2, 10, 4),
        (31, 2, 10, 3),
        (7, 2, 10, 0),
        (40, 1, 0, 0),
        (40, 1, -3, 0),
        (40, 0, 5, 0),
    ],
)
def test_record_count(size, npar, tot, expected):
    assert record_count(size, npar, tot) == expected


def test_row_count_matches_min_of_total_and_whole_records():
    for size in range(0, 41):
        for tot in (0, 1, 3, 50):
            data = bytes(size)
            rows = list(iter_rows(data, 2, tot, ParameterMask((1, 1))))
            assert len(rows) == min(tot, size // 8)


def test_negative_values_masked_as_twos_complement():
    rows = list(iter_rows(_pack(-1, -256), 2, 1, ParameterMask((255, 0xFFFF))))
    assert rows == [(255, 0xFF00)]


def test_zero_mask_clears_channel():
    rows = list(iter_rows(_pack(12345), 1, 1, ParameterMask((0,))))
    assert rows == [(0,)]


def test_iterator_is_lazy_and_restartable():
    data = _pack(1, 2, 3, 4)
    mask = ParameterMask((0xF, 0xF))
    it = iter_rows(data, 2, 2, mask)
    assert next(it) == (1, 2)
    # a fresh iterator starts over
    assert list(iter_rows(data, 2, 2, mask)) == [(1, 2), (3, 4)]
    assert list(it) == [(3, 4)]


def test_reads_from_memoryview_slice():
    buf = b"XXXX" + _pack(300, 2000) + b"YYYY"
    view = memoryview(buf)[4:12]
    assert list(iter_rows(view, 2, 1, ParameterMask((255, 1023)))) == [(44, 976)]


def test_event_count_defaults():
    assert event_count({"$TOT": "7"}) == 7
    assert event_count({}) == 0
    assert event_count({"$TOT": "many"}) == 0
    assert event_count({"$TOT": "-2"}) == 0


def test_decode_array_matches_iter_rows():
    data = _pack(300, 2000, -1, 5000, 7, 8, 9)
    mask = ParameterMask((255, 1023))
    arr = decode_array(data, 2, 10, mask)
    assert arr.shape == (3, 2)
    assert arr.tolist() == [list(r) for r in iter_rows(data, 2, 10, mask)]


def test_decode_array_empty():
    arr = decode_array(_pack(1, 2), 2, 0, ParameterMask((1, 1)))
    assert arr.shape == (0, 2)


def test_to_dataframe_uses_labels():
    df = to_dataframe(np.array([[44, 976]]), ["FL1", "FL2"])
    assert list(df.columns) == ["FL1", "FL2"]
    assert df.iloc[0].tolist() == [44, 976]


def test_huge_declared_range_decodes_in_both_paths():
    mask = ParameterMask.from_metadata({"$P1R": "99999999999999999999", "$P2R": "16"}, 2)
    data = _pack(-1, 300, 7, 2000)
    rows = list(iter_rows(data, 2, 2, mask))
    assert rows == [(0xFFFFFFFF, 12), (7, 0)]
    assert decode_array(data, 2, 2, mask).tolist() == [list(r) for r in rows]
