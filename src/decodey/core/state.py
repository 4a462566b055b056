from __future__ import annotations

import random
from datetime import datetime
from uuid import uuid4

import attrs
import msgspec

from decodey.core.cipher import (
    PLACEHOLDER,
    cipher_letters,
    encrypt,
    generate_mapping,
    invert_mapping,
    is_cipher_letter,
    letter_frequency,
    normalize_letter,
    normalize_text,
    render_display,
    reveal,
)
from decodey.core.models.enums import Difficulty
from decodey.core.models.session import PuzzleSession
from decodey.core.utils import utc_now

_MAX_MISTAKES = {
    Difficulty.EASY: 8,
    Difficulty.MEDIUM: 5,
    Difficulty.HARD: 3,
}
DEFAULT_MAX_MISTAKES = 5


def resolve_difficulty(value: Difficulty | str) -> Difficulty:
    """Map user input onto a Difficulty; unknown values fall back to medium."""
    try:
        return Difficulty(str(value).strip().lower())
    except ValueError:
        return Difficulty.MEDIUM


def max_mistakes_for(difficulty: Difficulty | str) -> int:
    try:
        return _MAX_MISTAKES[Difficulty(difficulty)]
    except (KeyError, ValueError):
        return DEFAULT_MAX_MISTAKES


@attrs.frozen(slots=True)
class BoardCell:
    cipher: str
    display: str
    is_letter: bool
    solved: bool
    selected: bool = False


@attrs.frozen(slots=True)
class LetterStatus:
    cipher: str
    count: int
    plain: str | None

    @property
    def solved(self) -> bool:
        return self.plain is not None


def board_cells(session: PuzzleSession) -> tuple[BoardCell, ...]:
    return tuple(
        BoardCell(
            cipher=cipher,
            display=display,
            is_letter=is_cipher_letter(cipher),
            solved=cipher in session.guessed_map,
            selected=cipher == session.selected_cipher_letter,
        )
        for cipher, display in zip(session.cipher_text, session.display_text, strict=True)
    )


def letter_statuses(session: PuzzleSession) -> tuple[LetterStatus, ...]:
    return tuple(
        LetterStatus(cipher=letter, count=count, plain=session.guessed_map.get(letter))
        for letter, count in sorted(session.letter_frequency.items())
    )


def unsolved_letters(session: PuzzleSession) -> set[str]:
    return cipher_letters(session.cipher_text) - session.guessed_map.keys()


def check_win(session: PuzzleSession) -> bool:
    return cipher_letters(session.cipher_text) == set(session.guessed_map)


def check_loss(session: PuzzleSession) -> bool:
    return session.mistake_count >= session.max_mistakes


def new_puzzle(
    difficulty: Difficulty | str,
    source_text: str,
    rng: random.Random,
    *,
    now: datetime | None = None,
    session_id: str | None = None,
    placeholder: str = PLACEHOLDER,
    author: str | None = None,
    quote_id: str | None = None,
) -> PuzzleSession:
    if not source_text:
        raise ValueError("Puzzle text must not be empty.")
    solution = normalize_text(source_text)
    if not cipher_letters(solution):
        raise ValueError("Puzzle text must contain at least one letter A-Z.")
    level = resolve_difficulty(difficulty)
    encode_map = generate_mapping(rng)
    cipher_text = encrypt(solution, encode_map)
    timestamp = now or utc_now()
    return PuzzleSession(
        id=session_id or uuid4().hex,
        source_text=solution,
        cipher_text=cipher_text,
        display_text=render_display(cipher_text, {}, placeholder),
        encode_map=encode_map,
        decode_map=invert_mapping(encode_map),
        letter_frequency=letter_frequency(cipher_text),
        difficulty=level,
        max_mistakes=max_mistakes_for(level),
        started_at=timestamp,
        last_updated_at=timestamp,
        author=author,
        quote_id=quote_id,
    )


def select_letter(session: PuzzleSession, cipher_letter: str) -> PuzzleSession:
    """Stage ``cipher_letter`` for the next guess.

    Solved letters and letters absent from the cipher text clear the selection
    instead, even on a finished session. Finished sessions never gain a new
    selection.
    """
    letter = normalize_letter(cipher_letter)
    if letter in session.guessed_map or letter not in session.letter_frequency:
        return msgspec.structs.replace(session, selected_cipher_letter=None)
    if session.is_terminal:
        return session
    return msgspec.structs.replace(session, selected_cipher_letter=letter)


def submit_guess(
    session: PuzzleSession, plain_letter: str, *, now: datetime | None = None
) -> tuple[PuzzleSession, bool]:
    guess = normalize_letter(plain_letter)
    selected = session.selected_cipher_letter
    if session.is_terminal or selected is None:
        return session, False

    timestamp = now or utc_now()
    if session.decode_map[selected] == guess:
        guessed_map = {**session.guessed_map, selected: guess}
        updated = msgspec.structs.replace(
            session,
            guessed_map=guessed_map,
            display_text=reveal(session.display_text, session.cipher_text, guessed_map),
            selected_cipher_letter=None,
            last_updated_at=timestamp,
        )
        return msgspec.structs.replace(updated, is_won=check_win(updated)), True

    updated = msgspec.structs.replace(
        session,
        mistake_count=session.mistake_count + 1,
        selected_cipher_letter=None,
        last_updated_at=timestamp,
    )
    return msgspec.structs.replace(updated, is_lost=check_loss(updated)), False


def request_hint(
    session: PuzzleSession, rng: random.Random, *, now: datetime | None = None
) -> tuple[PuzzleSession, bool]:
    """Reveal one random unsolved cipher letter at the cost of one mistake.

    A hint that completes the puzzle wins it, even when the same hint uses up
    the last of the mistake budget.
    """
    if session.is_terminal:
        return session, False
    candidates = sorted(unsolved_letters(session))
    if not candidates:
        return session, False

    letter = rng.choice(candidates)
    guessed_map = {**session.guessed_map, letter: session.decode_map[letter]}
    updated = msgspec.structs.replace(
        session,
        guessed_map=guessed_map,
        display_text=reveal(session.display_text, session.cipher_text, guessed_map),
        mistake_count=session.mistake_count + 1,
        selected_cipher_letter=(
            None if session.selected_cipher_letter == letter else session.selected_cipher_letter
        ),
        last_updated_at=now or utc_now(),
    )
    won = check_win(updated)
    lost = not won and check_loss(updated)
    selected = None if won or lost else updated.selected_cipher_letter
    finished = msgspec.structs.replace(
        updated, is_won=won, is_lost=lost, selected_cipher_letter=selected
    )
    return finished, True
