"""Domain models for decodey."""

from decodey.core.models.enums import Difficulty, GameStatus
from decodey.core.models.quote import Quote, QuoteCollection
from decodey.core.models.session import GameRecord, PuzzleSession, SessionSummary

__all__ = [
    "Difficulty",
    "GameRecord",
    "GameStatus",
    "PuzzleSession",
    "Quote",
    "QuoteCollection",
    "SessionSummary",
]
