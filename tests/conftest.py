# Shared pytest fixtures
from __future__ import annotations
import struct
import tempfile
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

import pytest

from lxbread.logging.init import reset_logging

MAGIC = b"FCS3.0    "
HEADER_SIZE = 58


def _encode_text(metadata: Mapping[str, str], delimiter: bytes) -> bytes:
    out = bytearray(delimiter)
    for key, value in metadata.items():
        out += key.encode("latin-1") + delimiter + value.encode("latin-1") + delimiter
    return bytes(out)


def _header(offsets: Sequence[int], magic: bytes = MAGIC) -> bytes:
    return magic + b"".join(f"{n:>8}".encode("ascii") for n in offsets)


def _build_lxb(
    metadata: Mapping[str, str],
    values: Sequence[int],
    *,
    delimiter: bytes = b"/",
    magic: bytes = MAGIC,
    data_end_override: int | None = None,
) -> bytes:
    """Assemble header + TEXT + DATA. Segments are located as buf[begin:end]."""
    text = _encode_text(metadata, delimiter)
    data = struct.pack(f"<{len(values)}i", *values)
    text_begin = HEADER_SIZE
    text_end = text_begin + len(text)
    data_begin = text_end
    data_end = data_begin + len(data) if data_end_override is None else data_end_override
    return _header((text_begin, text_end, data_begin, data_end, 0, 0), magic) + text + data


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def scenario_metadata() -> dict[str, str]:
    """Two 32-bit channels FL1 (range 256) and FL2 (range 1024), one event."""
    return {
        "$PAR": "2",
        "$P1B": "32",
        "$P1R": "256",
        "$P1S": "FL1",
        "$P2B": "32",
        "$P2R": "1024",
        "$P2S": "FL2",
        "$DATATYPE": "I",
        "$MODE": "L",
        "$BYTEORD": "1,2,3,4",
        "$TOT": "1",
    }


@pytest.fixture()
def build_lxb() -> Callable[..., bytes]:
    return _build_lxb


@pytest.fixture()
def encode_text() -> Callable[..., bytes]:
    return _encode_text


@pytest.fixture()
def header_bytes() -> Callable[..., bytes]:
    return _header


@pytest.fixture()
def scenario_file(temp_workdir: Path, scenario_metadata: dict[str, str]) -> Path:
    f = temp_workdir / "data" / "scenario.lxb"
    f.write_bytes(_build_lxb(scenario_metadata, [300, 2000]))
    return f


@pytest.fixture()
def bad_magic_file(temp_workdir: Path, scenario_metadata: dict[str, str]) -> Path:
    f = temp_workdir / "data" / "bad_magic.lxb"
    f.write_bytes(_build_lxb(scenario_metadata, [300, 2000], magic=b"FCS2.0    "))
    return f


@pytest.fixture()
def write_config(temp_workdir: Path) -> Callable[[str], Path]:
    def _write(text: str, name: str = "lxbread.yml") -> Path:
        cfg = temp_workdir / name
        cfg.write_text(text, encoding="utf-8")
        return cfg
    return _write
