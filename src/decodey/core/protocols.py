from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from decodey.core.models.quote import Quote
from decodey.core.models.session import PuzzleSession, SessionSummary


@runtime_checkable
class QuoteProvider(Protocol):
    """Protocol for sources of puzzle solutions.

    ``get_random_quote`` raises QuoteNotFoundError when nothing is available.
    """

    def get_random_quote(self) -> Quote: ...


@runtime_checkable
class SessionStorage(Protocol):
    """Protocol for persisting session state; failures raise StorageError."""

    def save(self, session: PuzzleSession) -> Path: ...

    def update(self, session: PuzzleSession, session_id: str) -> Path: ...

    def load(self, session_id: str) -> PuzzleSession | None: ...

    def load_most_recent(self) -> PuzzleSession | None: ...

    def list_sessions(self) -> list[SessionSummary]: ...
