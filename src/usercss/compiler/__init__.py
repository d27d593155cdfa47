"""Compilation of UserCSS source into ParsedStyle snapshots."""

from __future__ import annotations

from usercss.compiler.engine import parse_usercss
from usercss.compiler.preprocessor import detect_preprocessor
from usercss.compiler.substitution import Substitution, substitute

__all__ = ["Substitution", "detect_preprocessor", "parse_usercss", "substitute"]
