"""Shared exception hierarchy for the UserCSS engine."""

from __future__ import annotations

from .base import UserCSSError
from .config import ConfigError
from .records import RecordValidationError

__all__ = [
    "ConfigError",
    "RecordValidationError",
    "UserCSSError",
]
