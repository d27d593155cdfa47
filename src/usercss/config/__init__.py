"""Configuration loading and validation for the compilation engine."""

from __future__ import annotations

from usercss.config.loader import load_config
from usercss.config.model import EngineConfig
from usercss.config.validator import validate_config_file

__all__ = ["EngineConfig", "load_config", "validate_config_file"]
