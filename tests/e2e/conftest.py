"""E2E test fixtures and utilities.

These tests exercise complete CLI workflows as a player would experience them.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner


@pytest.fixture
def cli_runner() -> CliRunner:
    """Typer CliRunner for invoking commands."""
    return CliRunner()


@pytest.fixture
def saves_dir(tmp_path: Path) -> Path:
    out = tmp_path / "saves"
    out.mkdir(parents=True, exist_ok=True)
    return out
