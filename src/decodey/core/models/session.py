from __future__ import annotations

from datetime import datetime

import msgspec

from decodey.core.models.enums import Difficulty, GameStatus


class PuzzleSession(msgspec.Struct):
    """One cryptogram game, in progress or finished.

    Transition functions in ``decodey.core.state`` treat sessions as values:
    they return a new struct with copied maps instead of mutating the one they
    were given. ``decode_map`` is derived from ``encode_map`` at creation and
    is never written afterwards.
    """

    id: str
    source_text: str
    cipher_text: str
    display_text: str
    encode_map: dict[str, str]
    decode_map: dict[str, str]
    letter_frequency: dict[str, int]
    difficulty: Difficulty
    max_mistakes: int
    started_at: datetime
    last_updated_at: datetime
    guessed_map: dict[str, str] = msgspec.field(default_factory=dict)
    selected_cipher_letter: str | None = None
    mistake_count: int = 0
    is_won: bool = False
    is_lost: bool = False
    author: str | None = None
    quote_id: str | None = None

    @property
    def status(self) -> GameStatus:
        if self.is_won:
            return GameStatus.WON
        if self.is_lost:
            return GameStatus.LOST
        return GameStatus.IN_PROGRESS

    @property
    def is_terminal(self) -> bool:
        return self.is_won or self.is_lost

    @property
    def remaining_hints(self) -> int:
        return max(0, self.max_mistakes - self.mistake_count)

    @property
    def elapsed_seconds(self) -> int:
        return int((self.last_updated_at - self.started_at).total_seconds())


class SessionSummary(msgspec.Struct, frozen=True):
    id: str
    difficulty: Difficulty
    status: GameStatus
    started_at: datetime
    mistake_count: int


class GameRecord(msgspec.Struct, frozen=True):
    """Completed-game payload in the shape the sync layer expects."""

    game_id: str
    solution: str
    mistakes: int
    score: int
    time_taken: int
    has_won: bool
    difficulty: Difficulty


_encoder = msgspec.json.Encoder()
_decoder = msgspec.json.Decoder(PuzzleSession)


def encode_session(session: PuzzleSession) -> bytes:
    return _encoder.encode(session)


def decode_session(data: bytes) -> PuzzleSession:
    return _decoder.decode(data)
