"""UserCSS compilation and domain-matching engine."""

from __future__ import annotations

import logging
from importlib.metadata import PackageNotFoundError, version

from usercss.compiler import parse_usercss
from usercss.matching import matches

__all__ = ["__version__", "matches", "parse_usercss"]

try:
    __version__ = version("usercss-engine")
except PackageNotFoundError:
    __version__ = "0.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())
