"""Type-specific checks for variable defaults and caller-supplied values."""

from __future__ import annotations

from usercss.constants.variables import (
    CHECKBOX_VALUES,
    DECIMAL_PATTERN,
    HEX_COLOR_PATTERN,
    NUMBER_VALUE_PATTERN,
)
from usercss.model import VariableDescriptor


def parse_decimal(raw: str) -> int | float | None:
    """Parse a plain decimal literal, returning ``None`` when it is not one."""
    if not DECIMAL_PATTERN.match(raw):
        return None
    number = float(raw)
    return int(number) if number.is_integer() and "." not in raw else number


def split_number(raw: str) -> tuple[int | float, str] | None:
    """Split ``"16px"`` into ``(16, "px")``; ``None`` for non-numeric text."""
    match = NUMBER_VALUE_PATTERN.match(raw)
    if not match:
        return None
    number = parse_decimal(match.group(1))
    if number is None:
        return None
    return number, match.group(2)


def value_problem(variable: VariableDescriptor, value: str) -> str | None:
    """Describe why *value* is not acceptable for *variable*, or ``None`` if it is."""
    if variable.type == "color":
        if not HEX_COLOR_PATTERN.match(value.strip()):
            return f"'{value}' is not a 3, 6 or 8 digit hex color for {variable.name}"
        return None

    if variable.type == "number":
        parsed = split_number(value)
        if parsed is None:
            return f"'{value}' is not a number for {variable.name}"
        number, _unit = parsed
        if variable.min is not None and number < variable.min:
            return f"{value} is below the minimum {variable.min} for {variable.name}"
        if variable.max is not None and number > variable.max:
            return f"{value} is above the maximum {variable.max} for {variable.name}"
        return None

    if variable.type == "select":
        if variable.options and value not in variable.option_values:
            choices = ", ".join(variable.option_values)
            return f"'{value}' is not one of the options ({choices}) for {variable.name}"
        return None

    if variable.type == "checkbox":
        allowed = set(variable.option_values) or CHECKBOX_VALUES
        if value.strip().lower() not in allowed and value not in allowed:
            return f"'{value}' is not a checkbox state for {variable.name}"
        return None

    return None
