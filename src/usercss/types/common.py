"""Cross-module type aliases."""

from __future__ import annotations

from typing import Literal, TypeAlias

VariableType: TypeAlias = Literal["color", "number", "text", "select", "checkbox"]
VariableOrigin: TypeAlias = Literal["placeholder", "header"]
DomainRuleKind: TypeAlias = Literal["url", "url-prefix", "domain", "regexp"]
PreprocessorName: TypeAlias = Literal["none", "uso", "less", "stylus"]

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]
