"""Structured validation error model for config file validation."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """A single config problem with a stable code and the offending key."""

    code: str
    path: str
    field: str
    message: str
    hint: str = ""
    line: int | None = None

    def format(self) -> str:
        """Format as a human-readable single-line message."""
        location = self.path if self.line is None else f"{self.path}:{self.line}"
        parts = [f"[{self.code}]", location]
        if self.field:
            parts.append(f"{self.field}:")
        parts.append(self.message)
        if self.hint:
            parts.append(f"({self.hint})")
        return " ".join(parts)


def sort_errors(errors: list[ValidationError]) -> list[ValidationError]:
    """Order errors by code, then file, then key."""
    return sorted(errors, key=lambda e: (e.code, e.path, e.field, e.line or 0))


def format_errors(errors: list[ValidationError]) -> str:
    """Join formatted errors, one per line, in deterministic order."""
    return "\n".join(error.format() for error in sort_errors(errors))
