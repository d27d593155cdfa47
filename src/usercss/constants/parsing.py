"""Constants for metadata-header and placeholder parsing."""

from __future__ import annotations

import re

HEADER_START_TOKEN: str = "==UserStyle=="
HEADER_END_TOKEN: str = "==/UserStyle=="

# Comment opener followed by the start token, e.g. "/* ==UserStyle==".
HEADER_OPEN_PATTERN: re.Pattern[str] = re.compile(r"/\*\s*==UserStyle==")
# End token, plus the comment terminator when it follows.
HEADER_CLOSE_PATTERN: re.Pattern[str] = re.compile(r"==/UserStyle==(?:\s*\*/)?")

DIRECTIVE_LINE_PATTERN: re.Pattern[str] = re.compile(r"^\s*@([^\s@]+)(?:[ \t]+(.*?))?\s*$")

PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"/\*\[\[([^\]]*)\]\]\*/")
# Literal fallback that CSS engines see after a placeholder comment in a
# declaration value. Quoted strings and parenthesised calls are taken whole.
FALLBACK_PATTERN: re.Pattern[str] = re.compile(
    r"""[ \t]*((?:[^;{}(),!\r\n/"']|"(?:[^"\\\r\n]|\\.)*"|'(?:[^'\\\r\n]|\\.)*'|\([^()\r\n;{}]*\)|/(?!\*))+)"""
)
# First character that ends a declaration or opens a rule block.
BLOCK_BOUNDARY_PATTERN: re.Pattern[str] = re.compile(r"[;{}]")

COMMENT_PATTERN: re.Pattern[str] = re.compile(r"/\*.*?\*/", re.DOTALL)

VARIABLE_DIRECTIVES: frozenset[str] = frozenset({"var", "advanced"})

REQUIRED_META_KEYS: tuple[str, ...] = ("name", "namespace", "version")

# @key -> StyleMeta attribute for keys with a typed slot.
META_FIELD_MAP: dict[str, str] = {
    "name": "name",
    "namespace": "namespace",
    "version": "version",
    "description": "description",
    "author": "author",
    "license": "license",
    "homepageURL": "homepage_url",
    "supportURL": "support_url",
    "updateURL": "update_url",
    "preprocessor": "preprocessor",
}

URL_META_KEYS: tuple[str, ...] = ("homepageURL", "supportURL", "updateURL")
SOURCE_URL_PRECEDENCE: tuple[str, ...] = URL_META_KEYS

VALID_URL_PATTERN: re.Pattern[str] = re.compile(r"^(https?://|ftp://|file://|data:)")

# Header keys that feed domain rules instead of metadata fields.
DOMAIN_META_KEYS: frozenset[str] = frozenset({"domain", "match"})
