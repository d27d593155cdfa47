"""Human-readable stdout output for compile and match commands."""

from __future__ import annotations

from collections.abc import Sequence

from usercss.constants.branding import ASCII_LOGO_LINES, COMPILE_SUMMARY_TITLE
from usercss.constants.reporting import (
    ANSI_BOLD,
    ANSI_DIM,
    ANSI_GREEN,
    ANSI_RED,
    ANSI_RESET,
    ANSI_YELLOW,
    SNIPPET_MAX_LENGTH,
)
from usercss.model import DomainRule, ParsedStyle, VariableDescriptor


def _colorize(text: str, color: str) -> str:
    return f"{color}{text}{ANSI_RESET}"


def _snippet(text: str, limit: int = SNIPPET_MAX_LENGTH) -> str:
    flat = " ".join(text.split())
    return flat if len(flat) <= limit else f"{flat[: limit - 1]}…"


class StyleReporter:
    """Formats a compiled style as a short stdout summary."""

    def __init__(self, parsed: ParsedStyle, *, color: bool = True, verbose: bool = False) -> None:
        """Initialise the reporter."""
        self._parsed = parsed
        self._color = color
        self._verbose = verbose

    def render(self) -> str:
        """Render the full summary as a single string."""
        sections = [self._render_header(), self._render_variables(), self._render_messages()]
        return "\n".join(section for section in sections if section)

    def _paint(self, text: str, color: str) -> str:
        return _colorize(text, color) if self._color else text

    def _render_header(self) -> str:
        p = self._parsed
        meta = p.meta
        sep = "  " + "─" * 38
        title = meta.name or "(unnamed style)"
        version = f" {meta.version}" if meta.version else ""

        lines = [
            "",
            f"  {ASCII_LOGO_LINES[0]}",
            f"  {ASCII_LOGO_LINES[1]}",
            f"  {self._paint(COMPILE_SUMMARY_TITLE, ANSI_BOLD)}",
            sep,
            "",
            f"  Style       {title}{version} [{p.id}]",
        ]
        if meta.namespace:
            lines.append(f"  Namespace   {meta.namespace}")
        if meta.source_url:
            lines.append(f"  Source      {meta.source_url}")
        lines.append(f"  Variables   {len(p.variables)}")
        lines.append(f"  Applies to  {self._format_domains(p.domains)}")
        if p.preprocessor.name != "none":
            info = p.preprocessor
            lines.append(f"  Preproc     {info.name} ({info.source}, confidence {info.confidence:.2f})")
        lines.append(f"  Messages    {self._format_counts()}")
        lines.append(f"  Verdict     {self._render_verdict()}")
        lines.append("")
        return "\n".join(lines)

    def _render_variables(self) -> str:
        if not self._verbose or not self._parsed.variables:
            return ""
        lines = ["  Variables"]
        for variable in self._parsed.variables.values():
            lines.append(f"    {variable.name:<24}  {variable.type:<8}  {self._format_value(variable)}")
        lines.append("")
        return "\n".join(lines)

    def _render_messages(self) -> str:
        lines: list[str] = []
        for error in self._parsed.errors:
            lines.append(f"  {self._paint('error', ANSI_RED)}    {error}")
        for warning in self._parsed.warnings:
            lines.append(f"  {self._paint('warning', ANSI_YELLOW)}  {warning}")
        return "\n".join(lines)

    def _render_verdict(self) -> str:
        if self._parsed.ok:
            return self._paint("OK", ANSI_GREEN)
        return self._paint("BLOCKED", ANSI_RED) + " (errors prevent installation)"

    def _format_counts(self) -> str:
        errors = len(self._parsed.errors)
        warnings = len(self._parsed.warnings)
        error_str = self._paint(str(errors), ANSI_RED) if errors and self._color else str(errors)
        warning_str = self._paint(str(warnings), ANSI_YELLOW) if warnings and self._color else str(warnings)
        return f"{error_str} errors · {warning_str} warnings"

    def _format_value(self, variable: VariableDescriptor) -> str:
        value = _snippet(variable.value) if variable.value else "(empty)"
        if variable.value != variable.default:
            default = self._paint(f"default {_snippet(variable.default)}", ANSI_DIM)
            return f"{value}  {default}"
        return value

    @staticmethod
    def _format_domains(rules: Sequence[DomainRule], limit: int = 4) -> str:
        """Render a compact preview of the domain rules; no rules means every page."""
        if not rules:
            return "all pages"
        parts = [f"{rule.kind}({rule.pattern})" for rule in rules]
        parts = [part if rule.include else f"not {part}" for part, rule in zip(parts, rules, strict=True)]
        if len(parts) <= limit:
            return ", ".join(parts)
        return f"{', '.join(parts[:limit])}, +{len(parts) - limit} more"


def render_match_results(results: Sequence[tuple[str, bool]], *, color: bool = True) -> str:
    """Render one ``MATCH`` / ``SKIP`` line per URL."""
    lines: list[str] = []
    for url, matched in results:
        label = "MATCH" if matched else "SKIP "
        if color:
            label = _colorize(label, ANSI_GREEN if matched else ANSI_DIM)
        lines.append(f"{label}  {url}")
    return "\n".join(lines)
