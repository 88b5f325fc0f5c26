"""Configuration loading (YAML + JSON schema)."""

from .loader import ConfigError, DecoderConfig, load_config, resolve_config

__all__ = [
    "ConfigError",
    "DecoderConfig",
    "load_config",
    "resolve_config",
]
