"""Config data model for the compilation engine."""

from __future__ import annotations

from dataclasses import dataclass

from usercss.constants.config import (
    DEFAULT_EXTRACT_DOMAINS,
    DEFAULT_EXTRACT_VARIABLES,
    DEFAULT_MAX_SOURCE_BYTES,
    DEFAULT_REPORT_INVALID_REGEXP,
    DEFAULT_REQUIRE_HEADER,
)


@dataclass(frozen=True)
class EngineConfig:
    """Resolved engine config."""

    extract_domains: bool = DEFAULT_EXTRACT_DOMAINS
    extract_variables: bool = DEFAULT_EXTRACT_VARIABLES
    report_invalid_regexp: bool = DEFAULT_REPORT_INVALID_REGEXP
    max_source_bytes: int = DEFAULT_MAX_SOURCE_BYTES
    require_header: bool = DEFAULT_REQUIRE_HEADER
