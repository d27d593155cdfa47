"""Persisted style records: what a storage layer keeps between page loads.

A record carries only what the matcher and injector need later (rules,
variables, compiled CSS and metadata), validated against
``STYLE_RECORD_SCHEMA`` whenever it is read back.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from jsonschema import Draft202012Validator

from usercss.constants.records import RECORD_SCHEMA_VERSION, STYLE_RECORD_SCHEMA
from usercss.exceptions import RecordValidationError
from usercss.model import DomainRule, ParsedStyle, VariableDescriptor, VariableOption
from usercss.types import JsonObject

_VALIDATOR = Draft202012Validator(STYLE_RECORD_SCHEMA)


def style_to_record(parsed: ParsedStyle) -> JsonObject:
    """Build a JSON-compatible record for *parsed*."""
    return {
        "schema_version": RECORD_SCHEMA_VERSION,
        "id": parsed.id,
        "meta": parsed.meta.to_dict(),
        "domains": [rule.to_dict() for rule in parsed.domains],
        "variables": {name: variable.to_dict() for name, variable in parsed.variables.items()},
        "compiled_css": parsed.compiled_css,
        "metadata_block": parsed.metadata_block,
        "preprocessor": parsed.preprocessor.name,
    }


def validate_record(record: object) -> Mapping[str, Any]:
    """Raise :class:`RecordValidationError` unless *record* matches the schema."""
    problems = sorted(_VALIDATOR.iter_errors(record), key=lambda error: [str(part) for part in error.absolute_path])
    if problems:
        details = "; ".join(_describe(error.absolute_path, error.message) for error in problems)
        raise RecordValidationError(f"Invalid style record: {details}")
    assert isinstance(record, Mapping)
    return record


def rules_from_record(record: object) -> tuple[DomainRule, ...]:
    """Rebuild the domain rules stored in *record*."""
    valid = validate_record(record)
    return tuple(
        DomainRule(kind=entry["kind"], pattern=entry["pattern"], include=entry.get("include", True))
        for entry in valid["domains"]
    )


def variables_from_record(record: object) -> dict[str, VariableDescriptor]:
    """Rebuild the variable descriptors stored in *record*, in stored order."""
    valid = validate_record(record)
    return {name: _variable(name, entry) for name, entry in valid["variables"].items()}


def current_values_from_record(record: object) -> dict[str, str]:
    """Return the stored effective values, ready to pass back to ``parse_usercss``."""
    return {name: variable.value for name, variable in variables_from_record(record).items()}


def _variable(name: str, entry: Mapping[str, Any]) -> VariableDescriptor:
    return VariableDescriptor(
        name=name,
        type=entry["type"],
        default=entry["default"],
        value=entry["value"],
        label=entry.get("label", ""),
        min=entry.get("min"),
        max=entry.get("max"),
        step=entry.get("step"),
        unit=entry.get("unit"),
        options=tuple(VariableOption(value=item["value"], label=item["label"]) for item in entry.get("options", ())),
        option_css=MappingProxyType(dict(entry.get("option_css", {}))),
        origin=entry.get("origin", "placeholder"),
    )


def _describe(path: Any, message: str) -> str:
    location = "/".join(str(part) for part in path)
    return f"{location or '<root>'}: {message}"
