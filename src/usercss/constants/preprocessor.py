"""Preprocessor detection constants."""

from __future__ import annotations

import re

# @preprocessor values mapped onto detector names; "default" means plain CSS.
DECLARED_PREPROCESSORS: dict[str, str] = {
    "default": "none",
    "none": "none",
    "uso": "uso",
    "less": "less",
    "stylus": "stylus",
}

DECLARED_CONFIDENCE: float = 1.0
UNKNOWN_DECLARED_CONFIDENCE: float = 0.5
HEURISTIC_CONFIDENCE_CAP: float = 0.8
HEURISTIC_SCORE_DIVISOR: float = 4.0
# Minimum number of distinct hints before a guess is reported.
HEURISTIC_MIN_SCORE: int = 2

LESS_HINTS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\s*@[\w-]+\s*:", re.MULTILINE),
    re.compile(r"^\s*\.[\w-]+\s*\([^)]*\)\s*;", re.MULTILINE),
    re.compile(r"\bwhen\s*\("),
    re.compile(r"~\"[^\"]*\""),
    re.compile(r"@\{[\w-]+\}"),
)

STYLUS_HINTS: tuple[re.Pattern[str], ...] = (
    re.compile(r"^\s*\$?[\w-]+\s*=\s*\S", re.MULTILINE),
    re.compile(r"^\s*(?:if|unless)\s+\S", re.MULTILINE),
    re.compile(r"^\s*//", re.MULTILINE),
    re.compile(r"\{\$?[\w-]+\}"),
)
