from __future__ import annotations

import random
import threading
from collections.abc import Callable
from datetime import datetime

from decodey.core import state as transitions
from decodey.core.config import DecodeyConfig
from decodey.core.errors import QuoteNotFoundError, StorageError
from decodey.core.models.enums import Difficulty
from decodey.core.models.session import GameRecord, PuzzleSession
from decodey.core.protocols import QuoteProvider, SessionStorage
from decodey.core.scoring import build_game_record, compute_score
from decodey.core.utils import make_rng, utc_now
from decodey.logging import get_logger

log = get_logger(__name__)


class PuzzleEngine:
    """Owns the current puzzle session and serialises every change to it.

    Collaborators are injected: the quote provider supplies solutions, the
    storage receives a fire-and-forget save after each mutation, ``rng``
    drives cipher generation and hint choice, and ``clock`` stamps updates.
    """

    def __init__(
        self,
        quotes: QuoteProvider,
        storage: SessionStorage,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = utc_now,
        config: DecodeyConfig | None = None,
    ) -> None:
        self._quotes = quotes
        self._storage = storage
        self._rng = rng or make_rng()
        self._clock = clock
        self._config = config or DecodeyConfig()
        self._lock = threading.RLock()
        self._session: PuzzleSession | None = None
        self._persisted: set[str] = set()

    @property
    def session(self) -> PuzzleSession:
        if self._session is None:
            raise RuntimeError("Engine has not been started.")
        return self._session

    @property
    def config(self) -> DecodeyConfig:
        return self._config

    def new_game(self, difficulty: Difficulty | str | None = None) -> PuzzleSession:
        """Start a game with a random quote, falling back to the configured solution."""
        level = difficulty if difficulty is not None else self._config.default_difficulty
        try:
            quote = self._quotes.get_random_quote()
        except QuoteNotFoundError as exc:
            log.warning("quote_fallback_used", error=str(exc))
            return self.start(level, self._config.fallback_solution)
        return self.start(level, quote.text, author=quote.author, quote_id=quote.id)

    def start(
        self,
        difficulty: Difficulty | str,
        source_text: str,
        author: str | None = None,
        quote_id: str | None = None,
    ) -> PuzzleSession:
        with self._lock:
            session = transitions.new_puzzle(
                difficulty,
                source_text,
                self._rng,
                now=self._clock(),
                placeholder=self._config.placeholder,
                author=author,
                quote_id=quote_id,
            )
            self._session = session
            log.info(
                "puzzle_started",
                session_id=session.id,
                difficulty=session.difficulty.value,
                max_mistakes=session.max_mistakes,
                letters=len(session.letter_frequency),
            )
            self._persist()
            return session

    def resume(self, session: PuzzleSession) -> None:
        with self._lock:
            self._session = session
            self._persisted.add(session.id)
            log.info(
                "puzzle_resumed",
                session_id=session.id,
                solved=len(session.guessed_map),
                total=len(session.letter_frequency),
                mistakes=session.mistake_count,
            )

    def resume_latest(self) -> bool:
        """Resume the most recent saved game; False when there is none to resume."""
        try:
            session = self._storage.load_most_recent()
        except StorageError as exc:
            log.warning("session_load_failed", error=str(exc))
            return False
        if session is None:
            return False
        self.resume(session)
        return True

    def select_letter(self, cipher_letter: str) -> str | None:
        with self._lock:
            self._session = transitions.select_letter(self.session, cipher_letter)
            log.debug("letter_selected", selected=self._session.selected_cipher_letter)
            return self._session.selected_cipher_letter

    def submit_guess(self, plain_letter: str) -> bool:
        with self._lock:
            before = self.session
            after, correct = transitions.submit_guess(before, plain_letter, now=self._clock())
            if after is before:
                log.debug("guess_ignored", terminal=before.is_terminal)
                return False
            self._session = after
            log.debug(
                "guess_submitted",
                cipher_letter=before.selected_cipher_letter,
                correct=correct,
                mistakes=after.mistake_count,
            )
            self._after_move()
            return correct

    def request_hint(self) -> bool:
        with self._lock:
            after, success = transitions.request_hint(self.session, self._rng, now=self._clock())
            if not success:
                log.debug("hint_unavailable", session_id=after.id)
                return False
            self._session = after
            log.debug(
                "hint_revealed",
                mistakes=after.mistake_count,
                remaining=after.remaining_hints,
            )
            self._after_move()
            return True

    def score(self) -> int:
        return compute_score(self.session, self._config.penalty_per_mistake)

    def record(self) -> GameRecord:
        return build_game_record(self.session, self._config.penalty_per_mistake)

    def _after_move(self) -> None:
        session = self.session
        if session.is_won:
            log.info(
                "puzzle_won",
                session_id=session.id,
                mistakes=session.mistake_count,
                seconds=session.elapsed_seconds,
            )
        elif session.is_lost:
            log.info("puzzle_lost", session_id=session.id, mistakes=session.mistake_count)
        self._persist()

    def _persist(self) -> None:
        session = self.session
        try:
            if session.id in self._persisted:
                self._storage.update(session, session.id)
            else:
                self._storage.save(session)
                self._persisted.add(session.id)
        except StorageError as exc:
            log.warning("session_save_failed", session_id=session.id, error=str(exc))
            return
        log.debug("session_saved", session_id=session.id)
