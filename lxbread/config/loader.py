from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load an optional YAML config (``lxbread.yml``)
- Validate it against the bundled JSON schema (unknown keys rejected)
- Apply defaults for every missing key
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "SCHEMA_PATH",
    "ConfigError",
    "DecoderConfig",
    "load_config",
    "resolve_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("lxbread.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class DecoderConfig:
    input_directory: str | None = None  # scanned when no files are given
    file_suffix: str = ".lxb"
    header_prefix: str = ""  # e.g. "# " to mark the header line as a comment
    log_directory: str = "./logs"
    write_error_log: bool = True


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: schema file missing or not JSON, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path) -> DecoderConfig:
    """Load and validate the YAML config at ``path``.

    Raises:
        ConfigError: file missing, invalid YAML, or schema violation
    """
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping, got {type(data).__name__}")

    _validate_config_schema(data)

    defaults = DecoderConfig()
    return DecoderConfig(
        input_directory=data.get("input_directory", defaults.input_directory),
        file_suffix=data.get("file_suffix", defaults.file_suffix),
        header_prefix=data.get("header_prefix", defaults.header_prefix),
        log_directory=data.get("log_directory", defaults.log_directory),
        write_error_log=data.get("write_error_log", defaults.write_error_log),
    )


def resolve_config(path: Path | None) -> DecoderConfig:
    """Load an explicit config, else ``./lxbread.yml`` if present, else defaults."""
    if path is not None:
        return load_config(path)
    if DEFAULT_CONFIG_PATH.exists():
        return load_config(DEFAULT_CONFIG_PATH)
    return DecoderConfig()
