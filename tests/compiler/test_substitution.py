"""Tests for the placeholder substitution pass."""

from __future__ import annotations

from types import MappingProxyType

import pytest

from usercss.compiler.substitution import substitute
from usercss.model import VariableDescriptor, VariableOption
from usercss.parsers.placeholders import find_placeholders


def _var(name: str, value: str) -> VariableDescriptor:
    return VariableDescriptor(name=name, type="text", default=value, value=value)


def test_replaces_placeholder_and_fallback() -> None:
    css = "a { color: /*[[--c|color|#fff]]*/ #fff; }"

    result = substitute(css, find_placeholders(css), {"--c": _var("--c", "#123456")})

    assert result.text == "a { color: #123456; }"
    assert result.unresolved == ()


def test_every_occurrence_is_replaced() -> None:
    css = "a { color: /*[[--p]]*/ #fff; border-color: /*[[--p]]*/ #000; }"

    result = substitute(css, find_placeholders(css), {"--p": _var("--p", "#ff0000")})

    assert result.text.count("#ff0000") == 2


def test_text_outside_placeholders_is_untouched() -> None:
    css = "/* keep */ a { margin: 0; color: /*[[--c]]*/ red !important; }"

    result = substitute(css, find_placeholders(css), {"--c": _var("--c", "blue")})

    assert result.text == "/* keep */ a { margin: 0; color: blue !important; }"


def test_number_unit_comes_from_declaration() -> None:
    css = "a { width: /*[[--w|number|10]]*/ 10; }"
    variable = VariableDescriptor(name="--w", type="number", default="10", value="12", unit="em")

    result = substitute(css, find_placeholders(css), {"--w": variable})

    assert result.text == "a { width: 12em; }"


def test_number_value_with_own_unit_is_kept() -> None:
    css = "a { width: /*[[--w|number|10]]*/ 10px; }"
    variable = VariableDescriptor(name="--w", type="number", default="10", value="3rem")

    result = substitute(css, find_placeholders(css), {"--w": variable})

    assert result.text == "a { width: 3rem; }"


def test_empty_value_leaves_placeholder_verbatim() -> None:
    css = "a { color: /*[[--c]]*/ #fff; }"

    result = substitute(css, find_placeholders(css), {"--c": _var("--c", "")})

    assert result.text == css
    assert result.warnings == ("placeholder /*[[--c]]*/ left unresolved: no value and an empty default",)


def test_missing_variable_is_reported_separately() -> None:
    css = "a { color: /*[[--c]]*/ #fff; }"

    result = substitute(css, find_placeholders(css), {})

    assert result.text == css
    assert result.empty_defaults == ()
    assert result.warnings == ("placeholder /*[[--c]]*/ left unresolved: no matching variable",)


def test_select_option_css_resolves_nested_placeholders_once() -> None:
    css = "/*[[theme]]*/ body { margin: 0; }"
    theme = VariableDescriptor(
        name="theme",
        type="select",
        default="dark",
        value="dark",
        options=(VariableOption(value="dark", label="Dark"),),
        option_css=MappingProxyType({"dark": "body { color: /*[[ink]]*/; }"}),
    )
    variables = {"theme": theme, "ink": _var("ink", "#eee")}

    result = substitute(css, find_placeholders(css), variables)

    assert result.text == "body { color: #eee; } body { margin: 0; }"


def test_unresolved_nested_placeholder_is_reported() -> None:
    css = "/*[[theme]]*/"
    theme = VariableDescriptor(
        name="theme",
        type="select",
        default="dark",
        value="dark",
        option_css=MappingProxyType({"dark": "a { color: /*[[missing]]*/; }"}),
    )

    result = substitute(css, find_placeholders(css), {"theme": theme})

    assert result.text == "a { color: /*[[missing]]*/; }"
    assert result.unresolved == ("/*[[missing]]*/",)


@pytest.mark.parametrize(
    ("css", "value", "expected"),
    [
        (
            'a { background: url("/*[[v|text|a.png]]*/a.png"); }',
            "b.png",
            'a { background: url("b.png"); }',
        ),
        (
            "a { background: url('/*[[v|text|a.png]]*/a.png'); }",
            "b.png",
            "a { background: url('b.png'); }",
        ),
        (
            "a { background: url(/*[[v|text|a.png]]*/a.png); }",
            "b.png",
            "a { background: url(b.png); }",
        ),
        (
            'a::after { content: "/*[[v|text|Hi]]*/"; }',
            "Hello",
            'a::after { content: "Hello"; }',
        ),
        (
            'a::after { content: "/*[[v|text|Hi]]*/ Hi"; }',
            "Hello",
            'a::after { content: "Hello"; }',
        ),
        (
            "a { color: /*[[v|text|red]]*/ red !important; }",
            "blue",
            "a { color: blue !important; }",
        ),
        (
            "a { font-family: /*[[v|text|Arial]]*/ Arial, sans-serif; }",
            "Georgia",
            "a { font-family: Georgia, sans-serif; }",
        ),
        (
            'a { font-family: /*[[v|text|Arial]]*/ "Open Sans", serif; }',
            "Georgia",
            "a { font-family: Georgia, serif; }",
        ),
        (
            "/*[[v|text|main]]*/ .x { color: red; }",
            "nav",
            "nav .x { color: red; }",
        ),
        (
            "/* don't */ a { content: 'x'; color: /*[[v|text|red]]*/ red; }",
            "blue",
            "/* don't */ a { content: 'x'; color: blue; }",
        ),
    ],
    ids=[
        "double-quoted-url",
        "single-quoted-url",
        "bare-url",
        "empty-string",
        "string-with-fallback",
        "important",
        "comma-list",
        "quoted-list-item",
        "before-selector",
        "after-closed-strings",
    ],
)
def test_placeholder_in_context(css: str, value: str, expected: str) -> None:
    result = substitute(css, find_placeholders(css), {"v": _var("v", value)})

    assert result.text == expected


def test_select_before_selector_keeps_the_selector() -> None:
    css = "/*[[--sel|select|a|a,b]]*/ .x { color: red; }"
    variable = VariableDescriptor(
        name="--sel",
        type="select",
        default="a",
        value="a",
        options=(VariableOption(value="a", label="a"), VariableOption(value="b", label="b")),
    )

    result = substitute(css, find_placeholders(css), {"--sel": variable})

    assert result.text == "a .x { color: red; }"
