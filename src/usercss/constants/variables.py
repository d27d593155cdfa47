"""Variable type vocabulary and value validation constants."""

from __future__ import annotations

import re

VARIABLE_TYPES: tuple[str, ...] = ("color", "number", "text", "select", "checkbox")
FALLBACK_VARIABLE_TYPE: str = "text"

# Dialect spellings mapped onto the five canonical types.
VARIABLE_TYPE_ALIASES: dict[str, str] = {
    "range": "number",
    "dropdown": "select",
    "image": "select",
}

HEX_COLOR_PATTERN: re.Pattern[str] = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")
NUMBER_VALUE_PATTERN: re.Pattern[str] = re.compile(r"^\s*(-?(?:\d+(?:\.\d*)?|\.\d+))\s*([a-zA-Z%]*)\s*$")
DECIMAL_PATTERN: re.Pattern[str] = re.compile(r"^\s*-?(?:\d+(?:\.\d*)?|\.\d+)\s*$")
RANGE_SUFFIX_PATTERN: re.Pattern[str] = re.compile(r"^(?P<value>.*?)\s+(?P<min>\S*)\.\.(?P<max>\S*)$")
RANGE_SEGMENT_PATTERN: re.Pattern[str] = re.compile(r"^(?P<min>[^.]*(?:\.\d+)?)\.\.(?P<max>.*)$")

CHECKBOX_VALUES: frozenset[str] = frozenset({"0", "1", "true", "false"})
CHECKBOX_TRUE_VALUES: frozenset[str] = frozenset({"1", "true"})

OPTIONS_PREFIX: str = "options:"
DEFAULT_OPTION_MARKER: str = "*"

# USO dropdown option: key "Label*" <<<EOT css EOT;
EOT_OPTION_PATTERN: re.Pattern[str] = re.compile(
    r"([\w*-]+)\s+(\"[^\"]*\"|'[^']*'|\S+)\s*<<<EOT[ \t]*(.*?)[ \t]*EOT;",
    re.DOTALL,
)
