"""Decide whether a page URL should receive a style.

Everything here is a pure function of its arguments, so it is safe to call
per navigation without locking.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence
from urllib.parse import urlparse

from usercss.constants.domains import WILDCARD_PREFIX, WILDCARD_SUFFIX, WWW_PREFIX
from usercss.model import DomainRule

logger = logging.getLogger(__name__)


def extract_host(url: str) -> str:
    """Return the lower-cased hostname of *url*, or ``""`` when it has none."""
    try:
        host = urlparse(url.strip()).hostname
    except ValueError:
        return ""
    return host or ""


def matches(rules: Sequence[DomainRule], page_url: str) -> bool:
    """Return True when the style owning *rules* applies to *page_url*.

    No rules means the style is global. An exclusion rule that matches wins
    over everything; otherwise any matching inclusion rule is enough. A rule
    set made only of exclusions applies wherever none of them match.
    """
    if not rules:
        return True

    host = extract_host(page_url)
    if any(not rule.include and rule_matches(rule, page_url, host) for rule in rules):
        return False

    includes = [rule for rule in rules if rule.include]
    if not includes:
        return True
    return any(rule_matches(rule, page_url, host) for rule in includes)


def first_matching_rule(rules: Sequence[DomainRule], page_url: str) -> DomainRule | None:
    """Return the first inclusion rule that accepts *page_url*, if any."""
    host = extract_host(page_url)
    return next((rule for rule in rules if rule.include and rule_matches(rule, page_url, host)), None)


def rule_matches(rule: DomainRule, page_url: str, host: str | None = None) -> bool:
    """Evaluate a single rule, ignoring its include/exclude polarity."""
    if rule.kind == "url":
        return page_url == rule.pattern
    if rule.kind == "url-prefix":
        return page_url.startswith(rule.pattern)
    if rule.kind == "domain":
        return _host_matches(host if host is not None else extract_host(page_url), rule.pattern)
    if rule.kind == "regexp":
        try:
            return re.search(rule.pattern, page_url) is not None
        except re.error as exc:
            logger.debug("Invalid regexp rule %r never matches: %s", rule.pattern, exc)
            return False
    logger.debug("Unknown rule kind %r never matches", rule.kind)
    return False


def _host_matches(host: str, pattern: str) -> bool:
    host = _strip_www(host.lower().rstrip("."))
    pattern = pattern.strip().lower().rstrip(".")
    if pattern.startswith(WILDCARD_PREFIX):
        pattern = pattern[len(WILDCARD_PREFIX) :]
    pattern = _strip_www(pattern)
    if pattern.endswith(WILDCARD_SUFFIX):
        # "old.reddit.com*" accepts any host that starts with the stem.
        stem = pattern.rstrip(WILDCARD_SUFFIX)
        return bool(host) and bool(stem) and host.startswith(stem)
    if not host or not pattern:
        return False
    return host == pattern or host.endswith(f".{pattern}")


def _strip_www(name: str) -> str:
    return name[len(WWW_PREFIX) :] if name.startswith(WWW_PREFIX) else name
