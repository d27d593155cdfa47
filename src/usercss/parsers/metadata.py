"""Parser for the ``==UserStyle==`` metadata header."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType

from usercss.constants.parsing import (
    COMMENT_PATTERN,
    DIRECTIVE_LINE_PATTERN,
    DOMAIN_META_KEYS,
    HEADER_CLOSE_PATTERN,
    HEADER_END_TOKEN,
    HEADER_OPEN_PATTERN,
    HEADER_START_TOKEN,
    META_FIELD_MAP,
    PLACEHOLDER_PATTERN,
    REQUIRED_META_KEYS,
    SOURCE_URL_PRECEDENCE,
    URL_META_KEYS,
    VALID_URL_PATTERN,
    VARIABLE_DIRECTIVES,
)
from usercss.constants.variables import EOT_OPTION_PATTERN
from usercss.model import StyleMeta

logger = logging.getLogger(__name__)

NO_HEADER_WARNING: str = "no metadata header found"


@dataclass(frozen=True)
class HeaderDirective:
    """One ``@key value`` entry from the header, with its 1-based source line."""

    key: str
    value: str
    line: int


@dataclass(frozen=True)
class MetadataHeader:
    """Result of locating and reading the metadata header."""

    meta: StyleMeta
    block: str = ""
    start: int = -1
    end: int = -1
    directives: tuple[HeaderDirective, ...] = ()
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()

    @property
    def found(self) -> bool:
        return self.start >= 0

    def body_ranges(self, length: int) -> tuple[tuple[int, int], ...]:
        """Return the ``(start, end)`` spans of *source* that lie outside the header."""
        if not self.found:
            return ((0, length),)
        return tuple(span for span in ((0, self.start), (self.end, length)) if span[0] < span[1])

    def directives_for(self, keys: frozenset[str]) -> tuple[HeaderDirective, ...]:
        return tuple(directive for directive in self.directives if directive.key in keys)


def parse_metadata_header(source: str, *, require_header: bool = False) -> MetadataHeader:
    """Locate the first metadata header in *source* and read its directives.

    A missing header yields empty metadata and a warning (an error when
    *require_header* is set). A header that is opened but never closed is an
    error; the rest of the source is then treated as body.
    """
    opening = HEADER_OPEN_PATTERN.search(source)
    if opening is None:
        if require_header:
            return MetadataHeader(meta=StyleMeta(), errors=(NO_HEADER_WARNING,))
        return MetadataHeader(meta=StyleMeta(), warnings=(NO_HEADER_WARNING,))

    closing = HEADER_CLOSE_PATTERN.search(source, opening.end())
    if closing is None:
        line = _line_of(source, opening.start())
        return MetadataHeader(
            meta=StyleMeta(),
            errors=(f"unterminated metadata header: {HEADER_START_TOKEN} at line {line} has no {HEADER_END_TOKEN}",),
        )

    content = source[opening.end() : closing.start()]
    first_line = _line_of(source, opening.end())
    warnings: list[str] = []

    if HEADER_START_TOKEN in content:
        warnings.append(f"metadata header contains a second {HEADER_START_TOKEN} marker")
    if COMMENT_PATTERN.search(PLACEHOLDER_PATTERN.sub("", content)):
        warnings.append("metadata header contains nested comments; they may end the header early")

    directives = _read_directives(content, first_line)
    meta = _build_meta(directives, warnings)
    logger.debug("Read %d header directives starting at line %d", len(directives), first_line)

    return MetadataHeader(
        meta=meta,
        block=source[opening.start() : closing.end()],
        start=opening.start(),
        end=closing.end(),
        directives=tuple(directives),
        warnings=tuple(warnings),
    )


def _line_of(source: str, offset: int) -> int:
    return source.count("\n", 0, offset) + 1


def _read_directives(content: str, first_line: int) -> list[HeaderDirective]:
    directives: list[HeaderDirective] = []
    lines = content.split("\n")
    index = 0
    while index < len(lines):
        match = DIRECTIVE_LINE_PATTERN.match(lines[index].rstrip("\r"))
        line_number = first_line + index
        index += 1
        if not match:
            continue
        key = match.group(1)
        value = match.group(2) or ""

        # Variable directives may open a { ... } option block that spans lines.
        if key in VARIABLE_DIRECTIVES and _brace_depth(value) > 0:
            collected = [value]
            while index < len(lines) and _brace_depth("\n".join(collected)) > 0:
                collected.append(lines[index].rstrip("\r"))
                index += 1
            value = "\n".join(collected)

        directives.append(HeaderDirective(key=key, value=value.strip(), line=line_number))
    return directives


def _brace_depth(text: str) -> int:
    stripped = EOT_OPTION_PATTERN.sub("", text)
    return stripped.count("{") - stripped.count("}")


def _build_meta(directives: list[HeaderDirective], warnings: list[str]) -> StyleMeta:
    typed: dict[str, str] = {}
    extra: dict[str, str] = {}

    for directive in directives:
        if directive.key in VARIABLE_DIRECTIVES or directive.key in DOMAIN_META_KEYS:
            continue
        target = typed if directive.key in META_FIELD_MAP else extra
        if directive.key in target:
            warnings.append(f"duplicate @{directive.key} directive at line {directive.line} ignored")
            continue
        target[directive.key] = directive.value

    for key in REQUIRED_META_KEYS:
        if not typed.get(key):
            warnings.append(f"missing required @{key} directive in metadata header")

    for key in URL_META_KEYS:
        url = typed.get(key)
        if url and not VALID_URL_PATTERN.match(url):
            warnings.append(f"invalid @{key} format: {url}")

    source_url = next((typed[key] for key in SOURCE_URL_PRECEDENCE if typed.get(key)), "")
    fields = {META_FIELD_MAP[key]: value for key, value in typed.items()}

    return StyleMeta(
        name=fields.get("name", ""),
        namespace=fields.get("namespace", ""),
        version=fields.get("version", ""),
        description=fields.get("description", ""),
        author=fields.get("author", ""),
        source_url=source_url,
        license=fields.get("license"),
        homepage_url=fields.get("homepage_url"),
        support_url=fields.get("support_url"),
        update_url=fields.get("update_url"),
        preprocessor=fields.get("preprocessor"),
        extra=MappingProxyType(extra),
    )
