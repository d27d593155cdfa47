"""Persisted-record exceptions."""

from __future__ import annotations

from usercss.exceptions.base import UserCSSError


class RecordValidationError(UserCSSError, ValueError):
    """Raised when a persisted style record does not match the record schema."""
