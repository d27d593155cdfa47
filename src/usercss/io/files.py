"""Reading stylesheet sources from disk."""

from __future__ import annotations

from pathlib import Path


def read_source(path: Path) -> str:
    """Return the text of a ``.user.css`` file, keeping line endings as written."""
    with path.open("r", encoding="utf-8", newline="") as handle:
        return handle.read()
