"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.helpers.fake_linter import write_fake_linter


@pytest.fixture
def fake_linter(tmp_path: Path) -> Path:
    """Path to an executable fake linter."""
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    return write_fake_linter(bin_dir)
