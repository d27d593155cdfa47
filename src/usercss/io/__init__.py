"""I/O helpers for stylesheet sources and output files."""

from __future__ import annotations

from usercss.io.files import read_source
from usercss.io.json_io import load_json_file, write_json_atomic, write_text_atomic

__all__ = ["load_json_file", "read_source", "write_json_atomic", "write_text_atomic"]
