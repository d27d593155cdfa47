"""Parsers for the pieces of a UserCSS source."""

from .directives import DirectiveVariable, parse_variable_directive
from .domains import DomainExtraction, extract_domain_rules, normalize_domain_pattern
from .metadata import HeaderDirective, MetadataHeader, parse_metadata_header
from .placeholders import Placeholder, PlaceholderScan, find_placeholders, parse_placeholder, scan_placeholders
from .values import value_problem

__all__ = [
    "DirectiveVariable",
    "DomainExtraction",
    "HeaderDirective",
    "MetadataHeader",
    "Placeholder",
    "PlaceholderScan",
    "extract_domain_rules",
    "find_placeholders",
    "normalize_domain_pattern",
    "parse_metadata_header",
    "parse_placeholder",
    "parse_variable_directive",
    "scan_placeholders",
    "value_problem",
]
