from __future__ import annotations

import json
from pathlib import Path

import jsonschema

from lxbread.cli import main as cli_main

"""Error log lines follow a fixed JSON schema (no extra keys)."""

ERROR_LOG_SCHEMA = {
    "type": "object",
    "additionalProperties": False,
    "required": ["timestamp", "file", "stage", "parameter", "error_type", "message"],
    "properties": {
        "timestamp": {"type": "string", "pattern": "Z$"},
        "file": {"type": "string"},
        "stage": {"enum": ["read", "header", "text", "format", "data", "file"]},
        "parameter": {"type": "integer", "minimum": -1},
        "error_type": {"type": "string", "pattern": "^[A-Z][A-Z0-9_]*$"},
        "message": {"type": "string"},
    },
}


def test_error_log_lines_match_schema(
    temp_workdir: Path, bad_magic_file: Path, build_lxb, scenario_metadata
):
    scenario_metadata["$P1B"] = "64"
    wide = temp_workdir / "data" / "wide.lxb"
    wide.write_bytes(build_lxb(scenario_metadata, [1, 2]))

    code = cli_main([str(bad_magic_file), str(wide)])
    assert code == 1

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    lines = logs[0].read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    records = [json.loads(line) for line in lines]
    for rec in records:
        jsonschema.validate(rec, ERROR_LOG_SCHEMA)

    assert [r["error_type"] for r in records] == ["BAD_MAGIC", "UNSUPPORTED_BIT_WIDTH"]
    assert records[1]["parameter"] == 1
