from __future__ import annotations

import random
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest

from decodey.core.models.enums import Difficulty
from decodey.core.models.session import PuzzleSession
from decodey.core.state import new_puzzle

T0 = datetime(2025, 5, 7, 12, 0, 0, tzinfo=UTC)


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Automatically add markers based on test location.

    - tests/unit/ -> @pytest.mark.unit
    - tests/integration/ -> @pytest.mark.integration
    - tests/e2e/ -> @pytest.mark.e2e
    """
    for item in items:
        path = str(item.fspath)
        existing_markers = {m.name for m in item.iter_markers()}

        if "/unit/" in path and "unit" not in existing_markers:
            item.add_marker(pytest.mark.unit)
        elif "/integration/" in path and "integration" not in existing_markers:
            item.add_marker(pytest.mark.integration)
        elif "/e2e/" in path and "e2e" not in existing_markers:
            item.add_marker(pytest.mark.e2e)


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime = T0) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture(autouse=True)
def isolated_user_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DECODEY_CONFIG", str(tmp_path / "config" / "config.json"))
    monkeypatch.setenv("DECODEY_DATA_DIR", str(tmp_path / "data"))


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def hello_session() -> PuzzleSession:
    return new_puzzle(Difficulty.HARD, "HELLO WORLD", random.Random(7), now=T0)


@pytest.fixture
def quotes_file(tmp_path: Path):
    def _create(content: str, name: str = "quotes.yaml") -> Path:
        path = tmp_path / name
        path.write_text(content.strip(), encoding="utf-8")
        return path

    return _create
