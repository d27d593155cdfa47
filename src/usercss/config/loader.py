"""Config loading and normalization for the compilation engine."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from usercss.config.model import EngineConfig
from usercss.constants.config import BOOLEAN_CONFIG_KEYS, CONFIG_FILENAME, DEFAULT_MAX_SOURCE_BYTES
from usercss.constants.validation import ALLOWED_CONFIG_KEYS
from usercss.exceptions import ConfigError


def load_config(root: Path, config_path: Path | None = None) -> EngineConfig:
    """Load and validate engine config from ``usercss.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return EngineConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = sorted(str(key) for key in raw if key not in ALLOWED_CONFIG_KEYS)
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {', '.join(unknown)}")

    flags = {key: _ensure_bool(raw, key) for key in BOOLEAN_CONFIG_KEYS if key in raw}

    max_source_bytes = raw.get("max_source_bytes", DEFAULT_MAX_SOURCE_BYTES)
    if isinstance(max_source_bytes, bool) or not isinstance(max_source_bytes, int) or max_source_bytes <= 0:
        raise ConfigError("max_source_bytes must be a positive integer")

    return EngineConfig(max_source_bytes=max_source_bytes, **flags)


def _ensure_bool(raw: dict[str, Any], key: str) -> bool:
    """Return ``raw[key]`` as a bool, raising ConfigError on type mismatch."""
    value = raw[key]
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be a boolean")
    return value
