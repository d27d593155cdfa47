"""Root exception type."""

from __future__ import annotations


class UserCSSError(Exception):
    """Base class for errors raised by the engine itself.

    Problems in user-supplied stylesheet text are never raised; they are
    reported through ``ParsedStyle.warnings`` and ``ParsedStyle.errors``.
    """
