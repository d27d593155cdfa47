"""Site-targeting directive constants."""

from __future__ import annotations

import re

DOMAIN_RULE_KINDS: tuple[str, ...] = ("url", "url-prefix", "domain", "regexp")

DOCUMENT_DIRECTIVE_PATTERN: re.Pattern[str] = re.compile(r"@(?:-moz-)?document\b", re.IGNORECASE)

# Each condition is tried against these in order; ``url`` must not swallow ``url-prefix``.
CONDITION_PATTERNS: tuple[tuple[str, re.Pattern[str]], ...] = tuple(
    (
        kind,
        re.compile(
            rf"^{re.escape(kind)}\(\s*(?:\"((?:[^\"\\]|\\.)*)\"|'((?:[^'\\]|\\.)*)'|([^\"')]*?))\s*\)$",
            re.IGNORECASE | re.DOTALL,
        ),
    )
    for kind in DOMAIN_RULE_KINDS
)

WWW_PREFIX: str = "www."
WILDCARD_PREFIX: str = "*."
WILDCARD_SUFFIX: str = "*"
