"""Configuration-related exceptions."""

from __future__ import annotations

from usercss.exceptions.base import UserCSSError


class ConfigError(UserCSSError, ValueError):
    """Raised when engine configuration is invalid."""
