"""JSON schema for persisted style records."""

from __future__ import annotations

from typing import Any

RECORD_SCHEMA_VERSION: int = 1

_NUMBER_OR_NULL: dict[str, Any] = {"type": ["number", "null"]}

VARIABLE_RECORD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["name", "type", "default", "value"],
    "properties": {
        "name": {"type": "string", "minLength": 1},
        "type": {"enum": ["color", "number", "text", "select", "checkbox"]},
        "default": {"type": "string"},
        "value": {"type": "string"},
        "label": {"type": "string"},
        "origin": {"enum": ["placeholder", "header"]},
        "min": _NUMBER_OR_NULL,
        "max": _NUMBER_OR_NULL,
        "step": _NUMBER_OR_NULL,
        "unit": {"type": ["string", "null"]},
        "options": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["value", "label"],
                "properties": {"value": {"type": "string"}, "label": {"type": "string"}},
            },
        },
        "option_css": {"type": "object", "additionalProperties": {"type": "string"}},
    },
}

DOMAIN_RULE_RECORD_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["kind", "pattern"],
    "properties": {
        "kind": {"enum": ["url", "url-prefix", "domain", "regexp"]},
        "pattern": {"type": "string"},
        "include": {"type": "boolean"},
    },
    "additionalProperties": False,
}

STYLE_RECORD_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "UserCSS style record",
    "type": "object",
    "required": ["schema_version", "id", "meta", "domains", "variables", "compiled_css"],
    "properties": {
        "schema_version": {"const": RECORD_SCHEMA_VERSION},
        "id": {"type": "string", "pattern": "^[0-9a-f]{8}$"},
        "meta": {
            "type": "object",
            "required": ["name", "namespace", "version"],
            "properties": {
                "name": {"type": "string"},
                "namespace": {"type": "string"},
                "version": {"type": "string"},
            },
        },
        "domains": {"type": "array", "items": DOMAIN_RULE_RECORD_SCHEMA},
        "variables": {"type": "object", "additionalProperties": VARIABLE_RECORD_SCHEMA},
        "compiled_css": {"type": "string"},
        "metadata_block": {"type": "string"},
        "preprocessor": {"enum": ["none", "uso", "less", "stylus"]},
    },
}
