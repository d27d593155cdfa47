"""Runtime page matching against persisted domain rules."""

from __future__ import annotations

from usercss.matching.matcher import extract_host, first_matching_rule, matches, rule_matches

__all__ = ["extract_host", "first_matching_rule", "matches", "rule_matches"]
