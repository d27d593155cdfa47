"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "usercss"
ASCII_LOGO_LINES: tuple[str, ...] = (
    "/* usercss */",
    "   // compile styles, match pages",
)
COMPILE_SUMMARY_TITLE: str = "Compile summary"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} compiler and page matcher"))
