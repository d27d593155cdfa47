"""Detect which preprocessor a stylesheet is written for."""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from usercss.constants.parsing import COMMENT_PATTERN
from usercss.constants.preprocessor import (
    DECLARED_CONFIDENCE,
    DECLARED_PREPROCESSORS,
    HEURISTIC_CONFIDENCE_CAP,
    HEURISTIC_MIN_SCORE,
    HEURISTIC_SCORE_DIVISOR,
    LESS_HINTS,
    STYLUS_HINTS,
    UNKNOWN_DECLARED_CONFIDENCE,
)
from usercss.model import PreprocessorInfo, StyleMeta

logger = logging.getLogger(__name__)


def detect_preprocessor(
    meta: StyleMeta,
    body: str,
    *,
    has_uso_directives: bool = False,
) -> tuple[PreprocessorInfo, list[str]]:
    """Return the detected preprocessor and any warnings about it.

    An explicit ``@preprocessor`` wins. Without one, header ``@advanced``
    directives imply USO, and otherwise Less / Stylus syntax hints are scored
    over the comment-free body.
    """
    warnings: list[str] = []

    if meta.preprocessor:
        declared = meta.preprocessor.strip().lower()
        name = DECLARED_PREPROCESSORS.get(declared)
        if name is None:
            warnings.append(f"unknown @preprocessor '{meta.preprocessor}'; treating the style as plain CSS")
            return PreprocessorInfo(name="none", source="metadata", confidence=UNKNOWN_DECLARED_CONFIDENCE), warnings
        info = PreprocessorInfo(name=name, source="metadata", confidence=DECLARED_CONFIDENCE)  # type: ignore[arg-type]
    elif has_uso_directives:
        info = PreprocessorInfo(name="uso", source="metadata", confidence=HEURISTIC_CONFIDENCE_CAP)
    else:
        info = _guess(COMMENT_PATTERN.sub("", body))

    if info.needs_external_compiler:
        warnings.append(f"style is written for {info.name}; compiled output still needs the {info.name} compiler")
    return info, warnings


def _guess(body: str) -> PreprocessorInfo:
    less_score = _score(LESS_HINTS, body)
    stylus_score = _score(STYLUS_HINTS, body)
    logger.debug("Preprocessor hints: less=%d stylus=%d", less_score, stylus_score)

    best = max(less_score, stylus_score)
    if best < HEURISTIC_MIN_SCORE or less_score == stylus_score:
        return PreprocessorInfo()
    name = "less" if less_score > stylus_score else "stylus"
    confidence = min(best / HEURISTIC_SCORE_DIVISOR, HEURISTIC_CONFIDENCE_CAP)
    return PreprocessorInfo(name=name, source="heuristic", confidence=confidence)


def _score(hints: Sequence[re.Pattern[str]], body: str) -> int:
    return sum(1 for hint in hints if hint.search(body))
