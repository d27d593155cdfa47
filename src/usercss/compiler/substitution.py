"""Replace placeholders in the stylesheet body with effective values."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from usercss.model import VariableDescriptor
from usercss.parsers.placeholders import Placeholder, find_placeholders
from usercss.parsers.values import split_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Substitution:
    """Rewritten text plus the placeholders that could not be resolved.

    ``empty_defaults`` is the subset of ``unresolved`` whose variable exists
    but has neither a value nor a default.
    """

    text: str
    unresolved: tuple[str, ...] = ()
    empty_defaults: tuple[str, ...] = ()

    @property
    def warnings(self) -> tuple[str, ...]:
        return tuple(f"placeholder {raw} left unresolved: {self._reason(raw)}" for raw in self.unresolved)

    def _reason(self, raw: str) -> str:
        if raw in self.empty_defaults:
            return "no value and an empty default"
        return "no matching variable"


def substitute(
    text: str,
    placeholders: Sequence[Placeholder],
    variables: Mapping[str, VariableDescriptor],
) -> Substitution:
    """Replace each placeholder in *placeholders* and its literal fallback.

    Selects carrying option CSS are replaced by the fragment of the selected
    option, whose own placeholders are resolved once. Placeholders without a
    usable value stay exactly as written.
    """
    return _substitute(text, placeholders, variables, expand_fragments=True)


def render_value(placeholder: Placeholder, variable: VariableDescriptor) -> str:
    """Effective replacement text for *variable* at *placeholder*."""
    value = variable.value
    if variable.type != "number":
        return value
    parsed = split_number(value)
    if parsed is None or parsed[1]:
        return value
    unit = variable.unit or _fallback_unit(placeholder.fallback)
    return f"{value.strip()}{unit}" if unit else value


def _substitute(
    text: str,
    placeholders: Sequence[Placeholder],
    variables: Mapping[str, VariableDescriptor],
    *,
    expand_fragments: bool,
) -> Substitution:
    pieces: list[str] = []
    unresolved: list[str] = []
    empty_defaults: list[str] = []
    cursor = 0

    for placeholder in sorted(placeholders, key=lambda item: item.start):
        if placeholder.start < cursor:
            continue
        pieces.append(text[cursor : placeholder.start])
        variable = variables.get(placeholder.name)
        fragment = _option_fragment(variable) if variable is not None else None

        if fragment is not None:
            # Dropdown placeholders stand alone; what follows is real CSS.
            if expand_fragments:
                nested = _substitute(fragment, find_placeholders(fragment), variables, expand_fragments=False)
                fragment = nested.text
                unresolved.extend(nested.unresolved)
                empty_defaults.extend(nested.empty_defaults)
            pieces.append(fragment)
            cursor = placeholder.end
        elif variable is None or not variable.value:
            logger.debug("Leaving placeholder %s unresolved", placeholder.name or "<unnamed>")
            raw = f"/*[[{placeholder.raw}]]*/"
            unresolved.append(raw)
            if variable is not None:
                empty_defaults.append(raw)
            pieces.append(text[placeholder.start : placeholder.span_end])
            cursor = placeholder.span_end
        else:
            pieces.append(render_value(placeholder, variable))
            cursor = placeholder.span_end

    pieces.append(text[cursor:])
    return Substitution(
        text="".join(pieces),
        unresolved=tuple(unresolved),
        empty_defaults=tuple(dict.fromkeys(empty_defaults)),
    )


def _option_fragment(variable: VariableDescriptor) -> str | None:
    if variable.type != "select" or not variable.option_css:
        return None
    return variable.option_css.get(variable.value)


def _fallback_unit(fallback: str) -> str:
    parsed = split_number(fallback) if fallback else None
    return parsed[1] if parsed else ""
