"""Tests for inline /*[[...]]*/ placeholder parsing."""

from __future__ import annotations

import pytest

from usercss.model import VariableDescriptor
from usercss.parsers.placeholders import PlaceholderScan, find_placeholders, parse_placeholder, scan_placeholders


def _scan(css: str, header_variables: tuple[VariableDescriptor, ...] = ()) -> PlaceholderScan:
    return scan_placeholders(css, ((0, len(css)),), header_variables)


def test_find_placeholders_captures_fallback_span() -> None:
    css = "a { color: /*[[--fg|color|#fff]]*/ #ffffff !important; }"

    (placeholder,) = find_placeholders(css)

    assert placeholder.name == "--fg"
    assert placeholder.fallback == "#ffffff"
    assert css[placeholder.start : placeholder.span_end] == "/*[[--fg|color|#fff]]*/ #ffffff"
    assert placeholder.is_declaration


def test_fallback_keeps_function_calls_whole() -> None:
    css = "a { background: /*[[--bg|text|x]]*/ rgba(0, 0, 0, 0.5); }"

    (placeholder,) = find_placeholders(css)

    assert placeholder.fallback == "rgba(0, 0, 0, 0.5)"


def test_fallback_inside_string_stops_at_closing_quote() -> None:
    css = 'a { background: url("/*[[img|text|a.png]]*/a.png"); }'

    (placeholder,) = find_placeholders(css)

    assert placeholder.fallback == "a.png"
    assert css[placeholder.span_end :] == '"); }'


def test_text_before_a_block_is_not_a_fallback() -> None:
    css = "/*[[sel|text|main]]*/ .x { color: red; }"

    (placeholder,) = find_placeholders(css)

    assert placeholder.fallback == ""
    assert placeholder.span_end == placeholder.end


def test_placeholder_without_fallback() -> None:
    css = "/*[[layout]]*/\n.page {}"

    (placeholder,) = find_placeholders(css)

    assert placeholder.fallback == ""
    assert placeholder.span_end == placeholder.end
    assert not placeholder.is_declaration


@pytest.mark.parametrize(
    ("raw", "expected_type"),
    [
        ("--a|COLOR|#abc", "color"),
        ("--a|range|4", "number"),
        ("--a|dropdown|x|x,y", "select"),
        ("--a|checkbox|1", "checkbox"),
        ("--a|text|hello", "text"),
    ],
    ids=["case-insensitive", "range-alias", "dropdown-alias", "checkbox", "text"],
)
def test_type_names_and_aliases(raw: str, expected_type: str) -> None:
    parsed = parse_placeholder(raw)

    assert parsed.variable is not None
    assert parsed.variable.type == expected_type


def test_unknown_type_is_text_with_warning() -> None:
    parsed = parse_placeholder("--size|slider|12")

    assert parsed.variable is not None
    assert parsed.variable.type == "text"
    assert parsed.variable.default == "12"
    assert parsed.warnings
    assert "slider" in parsed.warnings[0]


def test_number_bounds_from_extra_segments() -> None:
    parsed = parse_placeholder("--font-size|number|16|12|24")

    variable = parsed.variable
    assert variable is not None
    assert (variable.min, variable.max) == (12, 24)
    assert parsed.warnings == ()


@pytest.mark.parametrize(
    "raw",
    ["--w|number|50|0..100", "--w|number|50 0..100"],
    ids=["range-segment", "range-suffix"],
)
def test_number_range_syntax(raw: str) -> None:
    parsed = parse_placeholder(raw)

    variable = parsed.variable
    assert variable is not None
    assert variable.default == "50"
    assert (variable.min, variable.max) == (0, 100)


def test_malformed_bound_is_ignored_with_warning() -> None:
    parsed = parse_placeholder("--w|number|5|low|10")

    variable = parsed.variable
    assert variable is not None
    assert variable.min is None
    assert variable.max == 10
    assert any("malformed minimum 'low'" in warning for warning in parsed.warnings)


def test_default_out_of_range_warns_but_is_kept() -> None:
    parsed = parse_placeholder("--w|number|200|0|100")

    assert parsed.variable is not None
    assert parsed.variable.default == "200"
    assert any("above the maximum" in warning for warning in parsed.warnings)


def test_invalid_color_default_warns() -> None:
    parsed = parse_placeholder("--c|color|red")

    assert parsed.variable is not None
    assert parsed.variable.default == "red"
    assert any("hex color" in warning for warning in parsed.warnings)


def test_select_options_with_labels_and_marker() -> None:
    parsed = parse_placeholder("--font|select||options:arial:Arial,georgia:Georgia*,mono")

    variable = parsed.variable
    assert variable is not None
    assert variable.option_values == ("arial", "georgia", "mono")
    assert [option.label for option in variable.options] == ["Arial", "Georgia", "mono"]
    assert variable.default == "georgia"


def test_select_default_falls_back_to_first_option() -> None:
    parsed = parse_placeholder("--font|select||a,b")

    assert parsed.variable is not None
    assert parsed.variable.default == "a"


def test_bare_name_declares_nothing() -> None:
    parsed = parse_placeholder("--fg")

    assert parsed.variable is None
    assert parsed.warnings == ()


def test_scan_keeps_first_declaration_of_same_type() -> None:
    scan = _scan("a { color: /*[[--c|color|#111]]*/ #111; } b { color: /*[[--c|color|#222]]*/ #222; }")

    assert scan.variables["--c"].default == "#111"
    assert any("duplicate declaration of --c" in warning for warning in scan.warnings)
    assert scan.errors == ()


def test_scan_conflicting_types_is_an_error() -> None:
    scan = _scan("a { color: /*[[--c|color|#111]]*/ #111; width: /*[[--c|number|4]]*/ 4px; }")

    assert len(scan.errors) == 1
    assert "--c" in scan.errors[0]


def test_scan_bare_reference_resolves_to_declaration() -> None:
    scan = _scan("a { color: /*[[--c]]*/ #000; } b { color: /*[[--c|color|#111]]*/ #111; }")

    assert list(scan.variables) == ["--c"]
    assert scan.variables["--c"].type == "color"
    assert len(scan.placeholders) == 2


def test_scan_undeclared_bare_name_is_implicit_text() -> None:
    scan = _scan("a { color: /*[[--bg-color]]*/ #ffffff; }")

    variable = scan.variables["--bg-color"]
    assert variable.type == "text"
    assert variable.default == ""
    assert scan.errors == ()


def test_scan_drops_unreferenced_header_variables() -> None:
    header_var = VariableDescriptor(name="unused", type="text", default="x", value="x", origin="header")

    scan = _scan("a { color: /*[[--c|color|#111]]*/ #111; }", (header_var,))

    assert "unused" not in scan.variables
    assert any("unused" in warning and "dropped" in warning for warning in scan.warnings)


def test_scan_only_looks_inside_body_ranges() -> None:
    css = "/*[[--skip|text|a]]*/ a; /*[[--keep|text|b]]*/ b;"
    split = css.index("/*[[--keep")

    scan = scan_placeholders(css, ((split, len(css)),))

    assert list(scan.variables) == ["--keep"]
