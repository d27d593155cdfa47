"""Constants for output files and stdout formatting."""

from __future__ import annotations

OUTPUT_TEMP_PREFIX: str = ".tmp-"
OUTPUT_TEMP_SUFFIX: str = ".part"

VALID_OUTPUT_FORMATS: frozenset[str] = frozenset({"css", "json"})
DEFAULT_OUTPUT_FORMAT: str = "css"

# ANSI escape codes for terminal colouring.
ANSI_RESET: str = "\033[0m"
ANSI_BOLD: str = "\033[1m"
ANSI_RED: str = "\033[31;1m"
ANSI_YELLOW: str = "\033[33;1m"
ANSI_GREEN: str = "\033[32;1m"
ANSI_DIM: str = "\033[2m"

SNIPPET_MAX_LENGTH: int = 48
