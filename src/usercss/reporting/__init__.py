"""Terminal reporting for compiled styles and match results."""

from __future__ import annotations

from usercss.reporting.stdout import StyleReporter, render_match_results

__all__ = ["StyleReporter", "render_match_results"]
