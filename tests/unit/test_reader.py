from __future__ import annotations

from pathlib import Path

import pytest

from lxbread.fcs.errors import (
    BadMagicError,
    LxbError,
    SegmentBoundsError,
    SegmentTooSmallError,
    TooSmallError,
    UnsupportedModeError,
)
from lxbread.fcs.reader import DecodedFile, decode_buffer, read_lxb_file


def test_decode_scenario(build_lxb, scenario_metadata):
    decoded = decode_buffer(build_lxb(scenario_metadata, [300, 2000]))
    assert isinstance(decoded, DecodedFile)
    assert decoded.metadata == scenario_metadata
    assert decoded.parameter_count == 2
    assert decoded.event_count == 1
    assert decoded.labels == ["FL1", "FL2"]
    assert list(decoded.rows()) == [(44, 976)]
    # rows() can be consumed repeatedly
    assert list(decoded.rows()) == [(44, 976)]


def test_offsets_follow_header(build_lxb, scenario_metadata):
    decoded = decode_buffer(build_lxb(scenario_metadata, [300, 2000]))
    assert decoded.offsets.text_begin == 58
    assert decoded.offsets.data_end - decoded.offsets.data_begin == 8
    assert decoded.offsets.analysis_begin == 0


def test_to_dataframe(build_lxb, scenario_metadata):
    scenario_metadata["$TOT"] = "2"
    df = decode_buffer(build_lxb(scenario_metadata, [300, 2000, 511, 1025])).to_dataframe()
    assert list(df.columns) == ["FL1", "FL2"]
    assert df.values.tolist() == [[44, 976], [255, 1]]


def test_truncated_buffer():
    with pytest.raises(TooSmallError):
        decode_buffer(b"FCS3.0    00000058")


def test_bad_magic(build_lxb, scenario_metadata):
    with pytest.raises(BadMagicError):
        decode_buffer(build_lxb(scenario_metadata, [1, 2], magic=b"NOTFCS    "))


def test_text_segment_out_of_bounds(header_bytes):
    buf = header_bytes((58, 500, 500, 508, 0, 0)) + b"/$PAR/1/"
    with pytest.raises(SegmentBoundsError) as e:
        decode_buffer(buf)
    assert e.value.stage == "text"


def test_text_segment_single_byte(header_bytes):
    buf = header_bytes((58, 59, 59, 63, 0, 0)) + b"/" + b"\x00" * 4
    with pytest.raises(SegmentTooSmallError):
        decode_buffer(buf)


def test_data_segment_out_of_bounds(build_lxb, scenario_metadata):
    buf = build_lxb(scenario_metadata, [300, 2000], data_end_override=10_000)
    with pytest.raises(SegmentBoundsError) as e:
        decode_buffer(buf)
    assert e.value.stage == "data"


def test_format_checked_before_data_bounds(build_lxb, scenario_metadata):
    scenario_metadata["$MODE"] = "H"
    buf = build_lxb(scenario_metadata, [300, 2000], data_end_override=10_000)
    with pytest.raises(UnsupportedModeError):
        decode_buffer(buf)


def test_all_failures_are_lxb_errors(build_lxb, scenario_metadata):
    scenario_metadata["$BYTEORD"] = "4,3,2,1"
    with pytest.raises(LxbError):
        decode_buffer(build_lxb(scenario_metadata, [300, 2000]))


def test_read_lxb_file(tmp_path: Path):
    f = tmp_path / "a.lxb"
    f.write_bytes(b"\x00\x01")
    assert read_lxb_file(f) == b"\x00\x01"
    with pytest.raises(OSError):
        read_lxb_file(tmp_path / "missing.lxb")
