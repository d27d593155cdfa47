"""Frozen dataclasses produced by a single compilation call."""

from __future__ import annotations

import hashlib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType

from usercss.types import DomainRuleKind, JsonObject, PreprocessorName, VariableOrigin, VariableType


@dataclass(frozen=True)
class VariableOption:
    """One choice offered by a ``select`` or ``checkbox`` variable."""

    value: str
    label: str

    def to_dict(self) -> JsonObject:
        return {"value": self.value, "label": self.label}


@dataclass(frozen=True)
class VariableDescriptor:
    """A user-configurable value declared in a stylesheet."""

    name: str
    type: VariableType
    default: str
    value: str
    label: str = ""
    min: float | None = None
    max: float | None = None
    step: float | None = None
    unit: str | None = None
    options: tuple[VariableOption, ...] = ()
    option_css: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    origin: VariableOrigin = "placeholder"

    @property
    def option_values(self) -> tuple[str, ...]:
        return tuple(option.value for option in self.options)

    def with_value(self, value: str) -> VariableDescriptor:
        """Return a copy carrying *value* as the effective value."""
        return replace(self, value=value)

    def to_dict(self) -> JsonObject:
        payload: JsonObject = {
            "name": self.name,
            "type": self.type,
            "default": self.default,
            "value": self.value,
            "label": self.label,
            "origin": self.origin,
        }
        for key in ("min", "max", "step", "unit"):
            attr = getattr(self, key)
            if attr is not None:
                payload[key] = attr
        if self.options:
            payload["options"] = [option.to_dict() for option in self.options]
        if self.option_css:
            payload["option_css"] = dict(self.option_css)
        return payload


@dataclass(frozen=True)
class DomainRule:
    """A site-targeting condition taken from a document directive."""

    kind: DomainRuleKind
    pattern: str
    include: bool = True

    def to_dict(self) -> JsonObject:
        return {"kind": self.kind, "pattern": self.pattern, "include": self.include}


@dataclass(frozen=True)
class StyleMeta:
    """Metadata read from the ``==UserStyle==`` header."""

    name: str = ""
    namespace: str = ""
    version: str = ""
    description: str = ""
    author: str = ""
    source_url: str = ""
    license: str | None = None
    homepage_url: str | None = None
    support_url: str | None = None
    update_url: str | None = None
    preprocessor: str | None = None
    extra: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def style_id(self) -> str:
        """Stable short identifier derived from namespace and name."""
        digest = hashlib.sha256(f"{self.namespace}:{self.name}".encode("utf-8"))
        return digest.hexdigest()[:8]

    def to_dict(self) -> JsonObject:
        payload: JsonObject = {
            "name": self.name,
            "namespace": self.namespace,
            "version": self.version,
            "description": self.description,
            "author": self.author,
            "source_url": self.source_url,
        }
        for key in ("license", "homepage_url", "support_url", "update_url", "preprocessor"):
            attr = getattr(self, key)
            if attr is not None:
                payload[key] = attr
        if self.extra:
            payload["extra"] = dict(self.extra)
        return payload


@dataclass(frozen=True)
class PreprocessorInfo:
    """Which preprocessor, if any, the stylesheet is written for."""

    name: PreprocessorName = "none"
    source: str | None = None
    confidence: float = 0.0

    @property
    def needs_external_compiler(self) -> bool:
        return self.name in {"less", "stylus"}


@dataclass(frozen=True)
class ParsedStyle:
    """Immutable snapshot returned by one compilation call."""

    meta: StyleMeta
    domains: tuple[DomainRule, ...] = ()
    variables: Mapping[str, VariableDescriptor] = field(default_factory=lambda: MappingProxyType({}))
    compiled_css: str = ""
    metadata_block: str = ""
    warnings: tuple[str, ...] = ()
    errors: tuple[str, ...] = ()
    preprocessor: PreprocessorInfo = field(default_factory=PreprocessorInfo)

    @property
    def ok(self) -> bool:
        """True when the compiled output is safe to install."""
        return not self.errors

    @property
    def id(self) -> str:
        return self.meta.style_id

    @property
    def current_values(self) -> dict[str, str]:
        """Effective value per variable, ready to feed back into a new parse."""
        return {name: variable.value for name, variable in self.variables.items()}

    def to_dict(self) -> JsonObject:
        return {
            "id": self.id,
            "meta": self.meta.to_dict(),
            "domains": [rule.to_dict() for rule in self.domains],
            "variables": {name: variable.to_dict() for name, variable in self.variables.items()},
            "compiled_css": self.compiled_css,
            "metadata_block": self.metadata_block,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "preprocessor": self.preprocessor.name,
        }
