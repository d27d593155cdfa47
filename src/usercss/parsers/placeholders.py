"""Parser for inline ``/*[[name|type|default|...]]*/`` variable placeholders."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from usercss.constants.parsing import BLOCK_BOUNDARY_PATTERN, FALLBACK_PATTERN, PLACEHOLDER_PATTERN
from usercss.constants.variables import (
    DEFAULT_OPTION_MARKER,
    FALLBACK_VARIABLE_TYPE,
    OPTIONS_PREFIX,
    RANGE_SEGMENT_PATTERN,
    RANGE_SUFFIX_PATTERN,
    VARIABLE_TYPE_ALIASES,
    VARIABLE_TYPES,
)
from usercss.model import VariableDescriptor, VariableOption
from usercss.parsers.values import parse_decimal, split_number, value_problem

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Placeholder:
    """One placeholder occurrence and the literal fallback that follows it."""

    name: str
    raw: str
    start: int
    end: int
    fallback: str = ""
    fallback_end: int = -1
    is_declaration: bool = False

    @property
    def span_end(self) -> int:
        """End of the text a substitution replaces (comment plus fallback)."""
        return self.fallback_end if self.fallback else self.end


@dataclass(frozen=True)
class PlaceholderDeclaration:
    """Descriptor parsed out of a single placeholder, plus what was odd about it."""

    variable: VariableDescriptor | None
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class PlaceholderScan:
    """All placeholders in the body and the variables they declare or reference."""

    placeholders: tuple[Placeholder, ...]
    variables: dict[str, VariableDescriptor]
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()


def find_placeholders(text: str, ranges: Sequence[tuple[int, int]] | None = None) -> list[Placeholder]:
    """Locate placeholders inside *ranges* of *text* (the whole text by default).

    Inside a quoted string the fallback is the rest of that string. Elsewhere
    it is the literal run of a declaration value; text that turns out to be a
    selector (followed by ``{``) is never taken as a fallback.
    """
    spans = ranges if ranges is not None else ((0, len(text)),)
    found: list[Placeholder] = []
    for range_start, range_end in spans:
        strings = _StringTracker(text, range_start)
        for match in PLACEHOLDER_PATTERN.finditer(text, range_start, range_end):
            quote = strings.advance(match.start(), match.end())
            if quote is not None:
                fallback, fallback_end = _quoted_fallback(text, match.end(), range_end, quote)
            else:
                fallback, fallback_end = _value_fallback(text, match.end(), range_end)
            raw = match.group(1)
            found.append(
                Placeholder(
                    name=raw.split("|", 1)[0].strip(),
                    raw=raw,
                    start=match.start(),
                    end=match.end(),
                    fallback=fallback,
                    fallback_end=fallback_end,
                    is_declaration="|" in raw,
                )
            )
    return found


def parse_placeholder(raw: str) -> PlaceholderDeclaration:
    """Parse the text between ``[[`` and ``]]`` into a descriptor.

    A bare name declares nothing by itself and yields no descriptor; see
    :func:`scan_placeholders` for how such references are resolved.
    """
    parts = raw.split("|")
    name = parts[0].strip()
    if not name:
        return PlaceholderDeclaration(None, (f"placeholder /*[[{raw}]]*/ has no variable name",))
    if len(parts) == 1:
        return PlaceholderDeclaration(None)

    warnings: list[str] = []
    raw_type = parts[1].strip().lower() or FALLBACK_VARIABLE_TYPE
    var_type = VARIABLE_TYPE_ALIASES.get(raw_type, raw_type)
    if var_type not in VARIABLE_TYPES:
        warnings.append(f"unknown variable type '{parts[1].strip()}' for {name}; treating as {FALLBACK_VARIABLE_TYPE}")
        var_type = FALLBACK_VARIABLE_TYPE

    default = parts[2].strip() if len(parts) > 2 else ""
    extras = [part.strip() for part in parts[3:]]

    if var_type == "number":
        variable = _number_placeholder(name, default, extras, warnings)
    elif var_type in {"select", "checkbox"}:
        variable = _choice_placeholder(name, var_type, default, extras)
    else:
        variable = VariableDescriptor(name=name, type=var_type, default=default, value=default, label=name)

    problem = value_problem(variable, variable.default) if variable.default else None
    if problem is not None:
        warnings.append(f"invalid default: {problem}")
    return PlaceholderDeclaration(variable, tuple(warnings))


def scan_placeholders(
    source: str,
    body_ranges: Sequence[tuple[int, int]],
    header_variables: Iterable[VariableDescriptor] = (),
) -> PlaceholderScan:
    """Collect placeholders from the body and reconcile them with header declarations.

    The first declaration of a name wins. A later declaration with the same
    type is a warning; one with a different type is an error. A bare
    ``/*[[name]]*/`` that nothing declares becomes an implicit ``text``
    variable with an empty default. Header variables that nothing references
    are dropped with a warning.
    """
    warnings: list[str] = []
    errors: list[str] = []
    declared: dict[str, VariableDescriptor] = {}

    def _declare(variable: VariableDescriptor, where: str) -> None:
        existing = declared.get(variable.name)
        if existing is None:
            declared[variable.name] = variable
        elif existing.type != variable.type:
            errors.append(
                f"variable {variable.name} is declared as {existing.type} and again as {variable.type} {where}"
            )
        else:
            warnings.append(f"duplicate declaration of {variable.name} {where} ignored")

    for variable in header_variables:
        _declare(variable, "in the metadata header")

    placeholders = find_placeholders(source, body_ranges)
    for placeholder in placeholders:
        if not placeholder.is_declaration:
            if not placeholder.name:
                warnings.append("placeholder /*[[]]*/ has no variable name")
            continue
        parsed = parse_placeholder(placeholder.raw)
        warnings.extend(parsed.warnings)
        if parsed.variable is not None:
            _declare(parsed.variable, f"at line {_line_of(source, placeholder.start)}")

    for placeholder in placeholders:
        if placeholder.name and placeholder.name not in declared:
            logger.debug("Implicit text variable %s from bare placeholder", placeholder.name)
            declared[placeholder.name] = VariableDescriptor(
                name=placeholder.name, type=FALLBACK_VARIABLE_TYPE, default="", value="", label=placeholder.name
            )

    referenced = _referenced_names(placeholders, declared)

    variables: dict[str, VariableDescriptor] = {}
    for name, variable in declared.items():
        if name in referenced:
            variables[name] = variable
        else:
            logger.debug("Dropping unreferenced header variable %s", name)
            warnings.append(f"variable {name} is declared but never used by a placeholder; dropped")

    return PlaceholderScan(
        placeholders=tuple(placeholders),
        variables=variables,
        warnings=tuple(warnings),
        errors=tuple(dict.fromkeys(errors)),
    )


def _referenced_names(placeholders: Sequence[Placeholder], declared: dict[str, VariableDescriptor]) -> set[str]:
    # Option fragments of a used dropdown may themselves reference variables.
    names = {placeholder.name for placeholder in placeholders if placeholder.name}
    for name in list(names):
        variable = declared.get(name)
        if variable is None:
            continue
        for fragment in variable.option_css.values():
            names.update(nested.name for nested in find_placeholders(fragment) if nested.name)
    return names


def _number_placeholder(name: str, default: str, extras: list[str], warnings: list[str]) -> VariableDescriptor:
    low: str | None = None
    high: str | None = None

    suffix = RANGE_SUFFIX_PATTERN.match(default)
    if suffix:
        default = suffix.group("value").strip()
        low, high = suffix.group("min"), suffix.group("max")

    if extras and extras[0]:
        segment = RANGE_SEGMENT_PATTERN.match(extras[0])
        if segment:
            low, high = segment.group("min"), segment.group("max")
        else:
            low = extras[0]
            high = extras[1] if len(extras) > 1 else high

    minimum = _bound(name, "minimum", low, warnings)
    maximum = _bound(name, "maximum", high, warnings)
    parsed = split_number(default)
    unit = parsed[1] if parsed and parsed[1] else None

    return VariableDescriptor(
        name=name,
        type="number",
        default=default,
        value=default,
        label=name,
        min=minimum,
        max=maximum,
        unit=unit,
    )


def _bound(name: str, which: str, raw: str | None, warnings: list[str]) -> int | float | None:
    if raw is None or not raw.strip():
        return None
    number = parse_decimal(raw)
    if number is None:
        warnings.append(f"malformed {which} '{raw}' for {name} ignored")
    return number


def _choice_placeholder(name: str, var_type: str, default: str, extras: list[str]) -> VariableDescriptor:
    options: list[VariableOption] = []
    starred: str | None = None
    raw_options = "|".join(extras).strip()
    if raw_options.startswith(OPTIONS_PREFIX):
        raw_options = raw_options[len(OPTIONS_PREFIX) :]

    for entry in (item.strip() for item in raw_options.split(",")):
        if not entry:
            continue
        value, _, label = entry.partition(":")
        value, value_marked = _unmark(value.strip())
        label, label_marked = _unmark(label.strip() or value)
        options.append(VariableOption(value=value, label=label))
        if (value_marked or label_marked) and starred is None:
            starred = value

    if not default:
        if starred is not None:
            default = starred
        elif var_type == "select" and options:
            default = options[0].value
        elif var_type == "checkbox":
            default = "0"

    return VariableDescriptor(
        name=name,
        type="select" if var_type == "select" else "checkbox",
        default=default,
        value=default,
        label=name,
        options=tuple(options),
    )


def _unmark(text: str) -> tuple[str, bool]:
    if text.endswith(DEFAULT_OPTION_MARKER):
        return text[: -len(DEFAULT_OPTION_MARKER)], True
    return text, False


def _line_of(source: str, offset: int) -> int:
    return source.count("\n", 0, offset) + 1


class _StringTracker:
    """Follow CSS string state through a range, skipping comments outside strings."""

    def __init__(self, text: str, start: int) -> None:
        self._text = text
        self._index = start
        self._quote: str | None = None

    def advance(self, position: int, resume: int) -> str | None:
        """Return the quote open at *position*, then continue from *resume*."""
        text = self._text
        index = self._index
        quote = self._quote
        while index < position:
            char = text[index]
            if char == "\\":
                index += 2
                continue
            if quote is not None:
                if char in (quote, "\n"):
                    quote = None
            elif text.startswith("/*", index):
                close = text.find("*/", index + 2)
                index = len(text) if close < 0 else close + 2
                continue
            elif char in "\"'":
                quote = char
            index += 1
        self._quote = quote
        self._index = max(index, resume)
        return quote


def _quoted_fallback(text: str, start: int, end: int, quote: str) -> tuple[str, int]:
    index = start
    while index < end:
        char = text[index]
        if char == "\\":
            index += 2
            continue
        if char == "\n":
            return "", start
        if char == quote:
            literal = text[start:index].rstrip()
            if not literal.strip():
                return "", start
            return literal.strip(), start + len(literal)
        index += 1
    return "", start


def _value_fallback(text: str, start: int, end: int) -> tuple[str, int]:
    literal = FALLBACK_PATTERN.match(text, start, end)
    if not literal or not literal.group(1).strip():
        return "", start
    fallback = literal.group(1).rstrip()
    fallback_end = literal.start(1) + len(fallback)
    boundary = BLOCK_BOUNDARY_PATTERN.search(text, fallback_end, end)
    if boundary is not None and boundary.group() == "{":
        return "", start
    return fallback, fallback_end
