"""Extraction of site-targeting rules from ``@-moz-document`` directives."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urlparse

from usercss.constants.domains import CONDITION_PATTERNS, DOCUMENT_DIRECTIVE_PATTERN, WILDCARD_PREFIX
from usercss.constants.parsing import COMMENT_PATTERN
from usercss.model import DomainRule
from usercss.parsers.metadata import HeaderDirective

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainExtraction:
    """Domain rules in source order, plus advisory messages."""

    rules: tuple[DomainRule, ...]
    warnings: tuple[str, ...] = ()


def extract_domain_rules(
    source: str,
    *,
    header_directives: Iterable[HeaderDirective] = (),
    report_invalid_regexp: bool = False,
) -> DomainExtraction:
    """Collect domain rules from header ``@domain`` / ``@match`` lines and document blocks.

    Header rules come first, then each document block in order, conditions
    left to right. A ``regexp()`` that does not compile is dropped; it is only
    mentioned in the warnings when *report_invalid_regexp* is set.
    """
    rules: list[DomainRule] = []
    warnings: list[str] = []

    for directive in header_directives:
        if directive.key == "domain":
            rules.extend(_header_domain_rules(directive, warnings))
        elif directive.key == "match":
            rules.extend(_header_match_rules(directive, warnings))

    comments = [(match.start(), match.end()) for match in COMMENT_PATTERN.finditer(source)]
    for directive in DOCUMENT_DIRECTIVE_PATTERN.finditer(source):
        if any(start <= directive.start() < end for start, end in comments):
            continue
        prelude_end = _prelude_end(source, directive.end())
        if prelude_end is None:
            warnings.append(f"unterminated {directive.group(0)} directive at offset {directive.start()} skipped")
            continue
        for condition in split_conditions(source[directive.end() : prelude_end]):
            rule = parse_condition(condition, warnings, report_invalid_regexp=report_invalid_regexp)
            if rule is not None:
                rules.append(rule)

    return DomainExtraction(rules=tuple(rules), warnings=tuple(warnings))


def normalize_domain_pattern(pattern: str) -> str:
    """Reduce a ``domain()`` argument to a bare hostname."""
    trimmed = pattern.strip()
    if "://" in trimmed:
        try:
            host = urlparse(trimmed).hostname
        except ValueError:
            host = None
        if host:
            return host
    return trimmed.rstrip("/").strip()


def split_conditions(prelude: str) -> list[str]:
    """Split a directive prelude on commas that sit outside quotes and parentheses."""
    conditions: list[str] = []
    current: list[str] = []
    quote: str | None = None
    depth = 0
    escaped = False

    for char in prelude:
        if escaped:
            escaped = False
        elif char == "\\":
            escaped = True
        elif quote is not None:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "," and depth == 0:
            conditions.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    conditions.append("".join(current).strip())
    return [condition for condition in conditions if condition]


def parse_condition(
    condition: str,
    warnings: list[str],
    *,
    report_invalid_regexp: bool = False,
) -> DomainRule | None:
    """Match one condition against ``url``, ``url-prefix``, ``domain`` and ``regexp`` in turn."""
    for kind, pattern in CONDITION_PATTERNS:
        match = pattern.match(condition)
        if not match:
            continue
        double_quoted, single_quoted, bare = match.groups()
        quoted = double_quoted if double_quoted is not None else single_quoted
        argument = quoted if quoted is not None else bare.strip()

        if kind == "domain":
            return DomainRule(kind="domain", pattern=normalize_domain_pattern(argument))
        if kind == "regexp":
            if quoted is not None:
                argument = argument.replace("\\\\", "\\")
            try:
                re.compile(argument)
            except re.error as exc:
                logger.debug("Skipping invalid regexp %r: %s", argument, exc)
                if report_invalid_regexp:
                    warnings.append(f"invalid regexp({argument!r}) dropped: {exc}")
                return None
            return DomainRule(kind="regexp", pattern=argument)
        return DomainRule(kind="url" if kind == "url" else "url-prefix", pattern=argument)

    warnings.append(f"unrecognized document condition {condition!r} ignored")
    return None


def _prelude_end(source: str, start: int) -> int | None:
    """Index of the ``{`` opening the directive body, skipping quoted text and parentheses."""
    quote: str | None = None
    depth = 0
    index = start
    while index < len(source):
        char = source[index]
        if char == "\\":
            index += 2
            continue
        if quote is not None:
            if char == quote:
                quote = None
        elif char in "\"'":
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth = max(depth - 1, 0)
        elif char == "{" and depth == 0:
            return index
        elif char in ";}" and depth == 0:
            return None
        index += 1
    return None


def _header_domain_rules(directive: HeaderDirective, warnings: list[str]) -> list[DomainRule]:
    rules: list[DomainRule] = []
    for entry in (item.strip() for item in directive.value.split(",")):
        if not entry:
            continue
        if "://" in entry:
            warnings.append(f'@domain "{entry}" at line {directive.line} includes a protocol; use the hostname only')
        elif any(mark in entry for mark in "/?#"):
            warnings.append(f'@domain "{entry}" at line {directive.line} includes a path; use the hostname only')
        rules.append(DomainRule(kind="domain", pattern=normalize_domain_pattern(entry).split("/", 1)[0]))
    return rules


def _header_match_rules(directive: HeaderDirective, warnings: list[str]) -> list[DomainRule]:
    rules: list[DomainRule] = []
    for entry in (item.strip() for item in directive.value.split(",")):
        if not entry:
            continue
        _, separator, remainder = entry.partition("://")
        host = (remainder if separator else entry).split("/", 1)[0].strip()
        if not host or host == "*" or host.strip("*.") == "":
            warnings.append(f"@match pattern {entry!r} at line {directive.line} does not name a host; ignored")
            continue
        if host.startswith("*") and not host.startswith(WILDCARD_PREFIX):
            warnings.append(f"@match pattern {entry!r} at line {directive.line} has an unsupported wildcard; ignored")
            continue
        rules.append(DomainRule(kind="domain", pattern=host.lower()))
    return rules
