from __future__ import annotations

import msgspec

from decodey.adapters.reporters.base import ReporterBase
from decodey.core.config import DecodeyConfig
from decodey.core.models.session import PuzzleSession
from decodey.core.scoring import build_game_record


class JsonReporter(ReporterBase):
    """Emits the game record consumed by the leaderboard sync layer."""

    content_type = "application/json"
    file_extension = "json"

    def __init__(self) -> None:
        self._encoder = msgspec.json.Encoder()

    def generate(self, session: PuzzleSession, config: DecodeyConfig) -> bytes:
        return self._encoder.encode(build_game_record(session, config.penalty_per_mistake))
