"""Score calculation for finished (or in-progress) puzzles."""

from __future__ import annotations

from decodey.core.models.enums import Difficulty
from decodey.core.models.session import GameRecord, PuzzleSession

PENALTY_PER_MISTAKE = 10

_BASE_SCORES = {
    Difficulty.EASY: 100,
    Difficulty.MEDIUM: 200,
    Difficulty.HARD: 300,
}


def base_score(difficulty: Difficulty | str) -> int:
    try:
        return _BASE_SCORES[Difficulty(str(difficulty).lower())]
    except (KeyError, ValueError):
        return _BASE_SCORES[Difficulty.MEDIUM]


def time_bonus(elapsed_seconds: int) -> int:
    """Bonus for fast solves; the 300-600 second band earns nothing."""
    if elapsed_seconds < 60:
        return 50
    if elapsed_seconds < 180:
        return 30
    if elapsed_seconds < 300:
        return 10
    if elapsed_seconds > 600:
        return -20
    return 0


def compute_score(session: PuzzleSession, penalty_per_mistake: int = PENALTY_PER_MISTAKE) -> int:
    penalty = session.mistake_count * penalty_per_mistake
    total = base_score(session.difficulty) - penalty + time_bonus(session.elapsed_seconds)
    return max(0, total)


def build_game_record(
    session: PuzzleSession, penalty_per_mistake: int = PENALTY_PER_MISTAKE
) -> GameRecord:
    return GameRecord(
        game_id=session.id,
        solution=session.source_text,
        mistakes=session.mistake_count,
        score=compute_score(session, penalty_per_mistake),
        time_taken=session.elapsed_seconds,
        has_won=session.is_won,
        difficulty=session.difficulty,
    )
