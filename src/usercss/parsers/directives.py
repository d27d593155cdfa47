"""Parser for ``@var`` / ``@advanced`` variable directives in the metadata header.

Two dialects are understood:

* Stylus-style ``@var <type> <name> <label> <default>`` where ``<default>`` is
  a plain value, or JSON for ``select`` (array / object) and ``number`` /
  ``range`` (``[value, min, max, step, unit]``).
* USO-style ``@advanced dropdown <name> <label> { key "Label*" <<<EOT css EOT; }``
  whose options each carry a literal CSS fragment.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from usercss.constants.variables import (
    CHECKBOX_TRUE_VALUES,
    DEFAULT_OPTION_MARKER,
    EOT_OPTION_PATTERN,
    FALLBACK_VARIABLE_TYPE,
    VARIABLE_TYPE_ALIASES,
    VARIABLE_TYPES,
)
from usercss.model import VariableDescriptor, VariableOption
from usercss.parsers.values import parse_decimal

logger = logging.getLogger(__name__)

_HEAD_PATTERN = re.compile(r"^\s*(?P<type>[A-Za-z_-]+)\s+(?P<name>[A-Za-z0-9_-]+)(?P<rest>.*)$", re.DOTALL)
_QUOTED_LABEL_PATTERN = re.compile(r"""^\s*(["'`])((?:\\.|(?!\1).)*)\1""", re.DOTALL)
_BARE_LABEL_PATTERN = re.compile(r"^\s*([^\s{]+)")


@dataclass(frozen=True)
class DirectiveVariable:
    """Outcome of reading one variable directive."""

    variable: VariableDescriptor | None
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class _SelectChoices:
    options: tuple[VariableOption, ...]
    default: str
    option_css: dict[str, str]


def parse_variable_directive(value: str, *, line: int | None = None) -> DirectiveVariable:
    """Turn the value of a ``@var`` / ``@advanced`` directive into a descriptor."""
    where = f" at line {line}" if line is not None else ""
    head = _HEAD_PATTERN.match(value)
    if head is None:
        return DirectiveVariable(None, (f"unreadable variable directive{where}: {value[:40]!r}",))

    raw_type = head.group("type").lower()
    name = head.group("name")
    label, remainder = _read_label(head.group("rest"))
    label = label if label is not None else name
    remainder = remainder.strip()
    warnings: list[str] = []

    if raw_type in {"dropdown", "image"} or (raw_type == "select" and "<<<EOT" in remainder):
        choices = _parse_eot_options(remainder)
        if choices is None:
            return DirectiveVariable(None, (f"dropdown variable {name}{where} has no <<<EOT options",))
        return DirectiveVariable(_select_descriptor(name, label, choices))

    if raw_type == "select":
        choices = _parse_json_options(remainder)
        if choices is None:
            return DirectiveVariable(None, (f"select variable {name}{where} has no readable options",))
        return DirectiveVariable(_select_descriptor(name, label, choices))

    if raw_type in {"number", "range"}:
        return DirectiveVariable(_number_descriptor(name, label, remainder, append_unit=raw_type == "range"))

    cleaned = _strip_quotes(remainder)
    if raw_type == "checkbox":
        state = "1" if cleaned.lower() in CHECKBOX_TRUE_VALUES else "0"
        return DirectiveVariable(_descriptor(name, "checkbox", label, state))

    var_type = VARIABLE_TYPE_ALIASES.get(raw_type, raw_type)
    if var_type not in VARIABLE_TYPES:
        warnings.append(f"unknown variable type '{raw_type}' for {name}{where}; treating as {FALLBACK_VARIABLE_TYPE}")
        var_type = FALLBACK_VARIABLE_TYPE
    return DirectiveVariable(_descriptor(name, var_type, label, cleaned), tuple(warnings))


def _descriptor(name: str, var_type: Any, label: str, default: str, **extra: Any) -> VariableDescriptor:
    return VariableDescriptor(
        name=name,
        type=var_type,
        default=default,
        value=default,
        label=label,
        origin="header",
        **extra,
    )


def _select_descriptor(name: str, label: str, choices: _SelectChoices) -> VariableDescriptor:
    return _descriptor(
        name,
        "select",
        label,
        choices.default,
        options=choices.options,
        option_css=MappingProxyType(choices.option_css),
    )


def _read_label(rest: str) -> tuple[str | None, str]:
    quoted = _QUOTED_LABEL_PATTERN.match(rest)
    if quoted:
        label = re.sub(r"\\(.)", r"\1", quoted.group(2))
        return label, rest[quoted.end() :]
    bare = _BARE_LABEL_PATTERN.match(rest)
    if bare:
        return bare.group(1), rest[bare.end() :]
    return None, rest


def _strip_quotes(value: str) -> str:
    trimmed = value.strip()
    if len(trimmed) >= 2 and trimmed[0] == trimmed[-1] and trimmed[0] in "\"'`":
        return trimmed[1:-1]
    return trimmed


def _pop_default_marker(text: str) -> tuple[str, bool]:
    if text.endswith(DEFAULT_OPTION_MARKER):
        return text[: -len(DEFAULT_OPTION_MARKER)], True
    return text, False


def _parse_eot_options(block: str) -> _SelectChoices | None:
    options: list[VariableOption] = []
    option_css: dict[str, str] = {}
    default: str | None = None

    for match in EOT_OPTION_PATTERN.finditer(block):
        key, key_default = _pop_default_marker(match.group(1).strip())
        label, label_default = _pop_default_marker(_strip_quotes(match.group(2)))
        options.append(VariableOption(value=key, label=label))
        option_css[key] = match.group(3).strip("\r\n").strip()
        if (key_default or label_default) and default is None:
            default = key

    if not options:
        return None
    return _SelectChoices(tuple(options), default if default is not None else options[0].value, option_css)


def _parse_json_options(raw: str) -> _SelectChoices | None:
    try:
        parsed = json.loads(raw)
    except ValueError:
        logger.debug("Select options are not valid JSON: %r", raw[:60])
        return None

    options: list[VariableOption] = []
    option_css: dict[str, str] = {}
    default: str | None = None

    if isinstance(parsed, dict):
        # {"name:Label*": "css"} -> option "name" whose fragment is the value.
        for raw_key, raw_css in parsed.items():
            option_name, _, raw_label = str(raw_key).partition(":")
            option_name, name_default = _pop_default_marker(option_name.strip())
            label, label_default = _pop_default_marker(raw_label.strip() or option_name)
            options.append(VariableOption(value=option_name, label=label))
            option_css[option_name] = raw_css if isinstance(raw_css, str) else json.dumps(raw_css)
            if (name_default or label_default) and default is None:
                default = option_name
    elif isinstance(parsed, list):
        for entry in parsed:
            option_value, _, option_label = str(entry).strip().partition(":")
            option_value, value_default = _pop_default_marker(option_value.strip())
            option_label, label_default = _pop_default_marker(option_label.strip() or option_value)
            options.append(VariableOption(value=option_value, label=option_label))
            if (value_default or label_default) and default is None:
                default = option_value
    else:
        return None

    if not options:
        return None
    return _SelectChoices(tuple(options), default if default is not None else options[0].value, option_css)


def _number_descriptor(name: str, label: str, raw: str, *, append_unit: bool) -> VariableDescriptor:
    trimmed = raw.strip()
    if trimmed.startswith("["):
        try:
            parsed = json.loads(trimmed)
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            numbers: list[int | float | None] = []
            unit: str | None = None
            for entry in parsed:
                if entry is None or (isinstance(entry, (int, float)) and not isinstance(entry, bool)):
                    numbers.append(entry)
                elif isinstance(entry, str):
                    number = parse_decimal(entry)
                    if number is not None:
                        numbers.append(number)
                    elif unit is None:
                        unit = entry
            numbers.extend([None] * (4 - len(numbers)))
            value, minimum, maximum, step = numbers[:4]
            value = 0 if value is None else value
            default = f"{value}{unit}" if append_unit and unit else str(value)
            return _descriptor(name, "number", label, default, min=minimum, max=maximum, step=step, unit=unit)

    return _descriptor(name, "number", label, _strip_quotes(trimmed))
