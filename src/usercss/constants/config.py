"""Configuration defaults and filenames."""

from __future__ import annotations

CONFIG_FILENAME: str = "usercss.yaml"

DEFAULT_EXTRACT_DOMAINS: bool = True
DEFAULT_EXTRACT_VARIABLES: bool = True
DEFAULT_REPORT_INVALID_REGEXP: bool = False
DEFAULT_REQUIRE_HEADER: bool = False
DEFAULT_MAX_SOURCE_BYTES: int = 1024 * 1024

BOOLEAN_CONFIG_KEYS: tuple[str, ...] = (
    "extract_domains",
    "extract_variables",
    "report_invalid_regexp",
    "require_header",
)
INTEGER_CONFIG_KEYS: tuple[str, ...] = ("max_source_bytes",)
