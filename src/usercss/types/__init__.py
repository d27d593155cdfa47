"""Shared type aliases for the engine."""

from .common import DomainRuleKind, JsonObject, JsonScalar, JsonValue, PreprocessorName, VariableOrigin, VariableType

__all__ = [
    "DomainRuleKind",
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "PreprocessorName",
    "VariableOrigin",
    "VariableType",
]
