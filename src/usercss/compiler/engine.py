"""Compilation entry point: UserCSS source in, immutable ParsedStyle out."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType

from usercss.compiler.preprocessor import detect_preprocessor
from usercss.compiler.substitution import substitute
from usercss.config.model import EngineConfig
from usercss.constants.parsing import DOMAIN_META_KEYS, VARIABLE_DIRECTIVES
from usercss.model import DomainRule, ParsedStyle, StyleMeta, VariableDescriptor
from usercss.parsers.directives import parse_variable_directive
from usercss.parsers.domains import extract_domain_rules
from usercss.parsers.metadata import MetadataHeader, parse_metadata_header
from usercss.parsers.placeholders import PlaceholderScan, scan_placeholders
from usercss.parsers.values import value_problem

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def parse_usercss(
    source: str,
    current_values: Mapping[str, str] | None = None,
    *,
    config: EngineConfig | None = None,
) -> ParsedStyle:
    """Parse *source* and compile it with *current_values* applied.

    Problems in the stylesheet never raise; they are reported through the
    ``warnings`` and ``errors`` of the returned :class:`ParsedStyle`. Only a
    caller mistake, such as passing something other than a string, raises.
    """
    if not isinstance(source, str):
        raise TypeError(f"source must be a str, got {type(source).__name__}")
    settings = config or EngineConfig()

    size = len(source.encode("utf-8"))
    if size > settings.max_source_bytes:
        logger.debug("Refusing %d byte source (limit %d)", size, settings.max_source_bytes)
        return ParsedStyle(
            meta=StyleMeta(),
            errors=(f"source is {size} bytes, larger than the {settings.max_source_bytes} byte limit",),
        )

    if source.startswith(_BOM):
        source = source[len(_BOM) :]

    header = parse_metadata_header(source, require_header=settings.require_header)
    body_ranges = header.body_ranges(len(source))
    warnings: list[str] = list(header.warnings)
    errors: list[str] = list(header.errors)

    variables: dict[str, VariableDescriptor] = {}
    compiled_css = source
    if settings.extract_variables:
        header_variables = _header_variables(header, warnings)
        scan = scan_placeholders(source, body_ranges, header_variables)
        warnings.extend(scan.warnings)
        errors.extend(scan.errors)
        variables = _apply_values(scan.variables, current_values or {}, warnings)
        compiled_css = _compile(source, scan, variables, warnings)

    domains: tuple[DomainRule, ...] = ()
    if settings.extract_domains:
        extraction = extract_domain_rules(
            source,
            header_directives=header.directives_for(DOMAIN_META_KEYS),
            report_invalid_regexp=settings.report_invalid_regexp,
        )
        domains = extraction.rules
        warnings.extend(extraction.warnings)

    body = "".join(source[start:end] for start, end in body_ranges)
    preprocessor, preprocessor_warnings = detect_preprocessor(
        header.meta,
        body,
        has_uso_directives=any(directive.key == "advanced" for directive in header.directives),
    )
    warnings.extend(preprocessor_warnings)

    parsed = ParsedStyle(
        meta=header.meta,
        domains=domains,
        variables=MappingProxyType(variables),
        compiled_css=compiled_css,
        metadata_block=header.block,
        warnings=tuple(warnings),
        errors=tuple(errors),
        preprocessor=preprocessor,
    )
    logger.info(
        "Parsed style %r: %d variables, %d domain rules, %d warnings, %d errors",
        parsed.meta.name or parsed.id,
        len(variables),
        len(domains),
        len(parsed.warnings),
        len(parsed.errors),
    )
    return parsed


def _header_variables(header: MetadataHeader, warnings: list[str]) -> list[VariableDescriptor]:
    variables: list[VariableDescriptor] = []
    for directive in header.directives_for(VARIABLE_DIRECTIVES):
        result = parse_variable_directive(directive.value, line=directive.line)
        warnings.extend(result.warnings)
        if result.variable is not None:
            variables.append(result.variable)
    return variables


def _apply_values(
    variables: dict[str, VariableDescriptor],
    current_values: Mapping[str, str],
    warnings: list[str],
) -> dict[str, VariableDescriptor]:
    """Overlay caller values on declared defaults; unusable values still win but are flagged."""
    applied = dict(variables)
    for name, raw in current_values.items():
        variable = applied.get(name)
        if variable is None:
            warnings.append(f"value supplied for unknown variable {name} ignored")
            continue
        if raw is None or str(raw) == "":
            continue
        value = str(raw)
        problem = value_problem(variable, value)
        if problem is not None:
            warnings.append(f"invalid value: {problem}")
        applied[name] = variable.with_value(value)
    return applied


def _compile(
    source: str,
    scan: PlaceholderScan,
    variables: Mapping[str, VariableDescriptor],
    warnings: list[str],
) -> str:
    result = substitute(source, scan.placeholders, variables)
    warnings.extend(result.warnings)
    return result.text
