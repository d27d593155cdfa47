"""Shared pytest fixtures for repository-local test data."""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def fixtures_root() -> Path:
    """Return root directory for test fixtures."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def styles_root(fixtures_root: Path) -> Path:
    """Return the directory holding sample ``.user.css`` files."""
    return fixtures_root / "styles"
