"""Core data models for the UserCSS engine."""

from .entities import (
    DomainRule,
    ParsedStyle,
    PreprocessorInfo,
    StyleMeta,
    VariableDescriptor,
    VariableOption,
)

__all__ = [
    "DomainRule",
    "ParsedStyle",
    "PreprocessorInfo",
    "StyleMeta",
    "VariableDescriptor",
    "VariableOption",
]
