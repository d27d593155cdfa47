"""Tests for @var / @advanced header variable directives."""

from __future__ import annotations

import pytest

from usercss.parsers.directives import parse_variable_directive


@pytest.mark.parametrize(
    ("value", "expected_type", "expected_default"),
    [
        ('color accent "Accent color" #ff8800', "color", "#ff8800"),
        ("text font Font 'Fira Sans'", "text", "Fira Sans"),
        ('checkbox rounded "Rounded corners" 1', "checkbox", "1"),
        ('checkbox rounded "Rounded corners" false', "checkbox", "0"),
        ('number gap "Gap" 8', "number", "8"),
    ],
    ids=["color", "text-quoted", "checkbox-on", "checkbox-off", "number-plain"],
)
def test_simple_directives(value: str, expected_type: str, expected_default: str) -> None:
    result = parse_variable_directive(value)

    assert result.variable is not None
    assert result.variable.type == expected_type
    assert result.variable.default == expected_default
    assert result.variable.value == expected_default
    assert result.variable.origin == "header"
    assert result.warnings == ()


def test_label_is_unquoted() -> None:
    result = parse_variable_directive('color accent "Accent \\"main\\" color" #fff')

    assert result.variable is not None
    assert result.variable.label == 'Accent "main" color'


def test_range_with_json_bounds_appends_unit() -> None:
    result = parse_variable_directive('range width "Width" [960, 600, 1600, 20, "px"]')

    variable = result.variable
    assert variable is not None
    assert variable.type == "number"
    assert variable.default == "960px"
    assert (variable.min, variable.max, variable.step, variable.unit) == (600, 1600, 20, "px")


def test_number_with_json_bounds_keeps_bare_default() -> None:
    result = parse_variable_directive('number opacity "Opacity" [0.8, 0, 1, 0.1]')

    variable = result.variable
    assert variable is not None
    assert variable.default == "0.8"
    assert variable.max == 1


def test_select_json_array_with_default_marker() -> None:
    result = parse_variable_directive('select font "Font" ["Arial", "Georgia*", "Verdana"]')

    variable = result.variable
    assert variable is not None
    assert variable.type == "select"
    assert variable.option_values == ("Arial", "Georgia", "Verdana")
    assert variable.default == "Georgia"


def test_select_json_object_builds_option_css() -> None:
    result = parse_variable_directive(
        'select theme "Theme" {"dark:Dark*": "body{color:#fff}", "light:Light": "body{}"}'
    )

    variable = result.variable
    assert variable is not None
    assert variable.option_values == ("dark", "light")
    assert variable.options[0].label == "Dark"
    assert variable.default == "dark"
    assert variable.option_css["dark"] == "body{color:#fff}"


def test_uso_dropdown_with_eot_options() -> None:
    value = 'dropdown theme "Theme" {\n  light "Light" <<<EOT\n a{} EOT;\n  dark "Dark*" <<<EOT\n b{} EOT;\n}'

    result = parse_variable_directive(value)

    variable = result.variable
    assert variable is not None
    assert variable.type == "select"
    assert variable.option_values == ("light", "dark")
    assert variable.default == "dark"
    assert dict(variable.option_css) == {"light": "a{}", "dark": "b{}"}


def test_dropdown_without_options_is_skipped_with_warning() -> None:
    result = parse_variable_directive('dropdown theme "Theme" {}', line=7)

    assert result.variable is None
    assert result.warnings == ("dropdown variable theme at line 7 has no <<<EOT options",)


def test_unknown_type_falls_back_to_text() -> None:
    result = parse_variable_directive('slider size "Size" 12')

    assert result.variable is not None
    assert result.variable.type == "text"
    assert result.variable.default == "12"
    assert any("unknown variable type 'slider'" in warning for warning in result.warnings)


def test_unreadable_directive_warns() -> None:
    result = parse_variable_directive("???")

    assert result.variable is None
    assert len(result.warnings) == 1
