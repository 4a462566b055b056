from __future__ import annotations

import re
import time
from datetime import datetime
from pathlib import Path
from typing import Iterable

import msgspec
from msgspec import DecodeError

from decodey.core.errors import StorageError
from decodey.core.models.enums import Difficulty, GameStatus
from decodey.core.models.session import (
    PuzzleSession,
    SessionSummary,
    decode_session,
    encode_session,
)
from decodey.core.utils import atomic_write_bytes


class SessionIndexEntry(msgspec.Struct):
    id: str
    difficulty: Difficulty
    status: GameStatus
    started_at: datetime
    mistake_count: int
    updated_at: float


class SessionStore:
    def __init__(self, base_dir: Path) -> None:
        self._base_dir = base_dir
        try:
            self._base_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create session directory {base_dir}: {exc}") from exc
        self._index_encoder = msgspec.json.Encoder()
        self._index_decoder = msgspec.json.Decoder(list[SessionIndexEntry])

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    def _validate_session_id(self, session_id: str) -> str:
        if not re.fullmatch(r"[a-f0-9]{32}", session_id):
            raise ValueError("Invalid session id.")
        return session_id

    def _path_for(self, session_id: str) -> Path:
        safe_id = self._validate_session_id(session_id)
        return self._base_dir / f"game-{safe_id}.json"

    def _index_path(self) -> Path:
        return self._base_dir / "game-index.json"

    def _entry_for(self, session: PuzzleSession, updated_at: float) -> SessionIndexEntry:
        return SessionIndexEntry(
            id=session.id,
            difficulty=session.difficulty,
            status=session.status,
            started_at=session.started_at,
            mistake_count=session.mistake_count,
            updated_at=updated_at,
        )

    def _load_index(self) -> dict[str, SessionIndexEntry] | None:
        path = self._index_path()
        if not path.exists():
            return None
        try:
            entries = self._index_decoder.decode(path.read_bytes())
        except (OSError, DecodeError, ValueError, TypeError):
            return None
        return {entry.id: entry for entry in entries}

    def _save_index(self, entries: Iterable[SessionIndexEntry]) -> None:
        payload = self._index_encoder.encode(list(entries))
        atomic_write_bytes(self._index_path(), payload)

    def _scan_sessions(self) -> dict[str, SessionIndexEntry]:
        entries: dict[str, SessionIndexEntry] = {}
        try:
            paths = list(self._base_dir.glob("game-*.json"))
        except OSError as exc:
            raise StorageError(f"Cannot read session directory {self._base_dir}: {exc}") from exc
        for path in paths:
            if path == self._index_path():
                continue
            try:
                session = decode_session(path.read_bytes())
                mtime = path.stat().st_mtime
            except (OSError, DecodeError, ValueError, TypeError):
                continue
            entries[session.id] = self._entry_for(session, mtime)
        return entries

    def _entries(self) -> dict[str, SessionIndexEntry]:
        entries = self._load_index()
        if entries is None:
            entries = self._scan_sessions()
            try:
                self._save_index(entries.values())
            except OSError:
                pass
        return entries

    def _write(self, session: PuzzleSession) -> Path:
        try:
            path = self._path_for(session.id)
        except ValueError as exc:
            raise StorageError(str(exc)) from exc
        try:
            atomic_write_bytes(path, encode_session(session))
        except OSError as exc:
            raise StorageError(f"Failed to write session {session.id}: {exc}") from exc
        entries = self._load_index() or self._scan_sessions()
        entries[session.id] = self._entry_for(session, time.time())
        try:
            self._save_index(entries.values())
        except OSError:
            pass
        return path

    def save(self, session: PuzzleSession) -> Path:
        return self._write(session)

    def update(self, session: PuzzleSession, session_id: str) -> Path:
        if session.id != session_id:
            raise StorageError("Session id does not match the record being updated.")
        try:
            path = self._path_for(session_id)
        except ValueError as exc:
            raise StorageError(str(exc)) from exc
        if not path.exists():
            raise StorageError(f"No saved session with id {session_id}.")
        return self._write(session)

    def load(self, session_id: str) -> PuzzleSession | None:
        try:
            path = self._path_for(session_id)
        except ValueError:
            return None
        if not path.exists():
            return None
        try:
            return decode_session(path.read_bytes())
        except (OSError, DecodeError, ValueError, TypeError):
            return None

    def load_from_path(self, path: Path) -> PuzzleSession:
        if not path.is_file():
            raise ValueError("Session path must be a file.")
        if not path.name.startswith("game-") or path.suffix.lower() != ".json":
            raise ValueError("Session file name must be game-<id>.json.")
        return decode_session(path.read_bytes())

    def list_sessions(self) -> list[SessionSummary]:
        entries = sorted(self._entries().values(), key=lambda entry: entry.updated_at, reverse=True)
        return [
            SessionSummary(
                id=entry.id,
                difficulty=entry.difficulty,
                status=entry.status,
                started_at=entry.started_at,
                mistake_count=entry.mistake_count,
            )
            for entry in entries
        ]

    def _latest(self, status: GameStatus | None = None) -> PuzzleSession | None:
        candidates = [
            entry
            for entry in self._entries().values()
            if status is None or entry.status == status
        ]
        candidates.sort(key=lambda entry: entry.updated_at, reverse=True)
        for entry in candidates:
            session = self.load(entry.id)
            if session is not None:
                return session
        return None

    def load_most_recent(self) -> PuzzleSession | None:
        return self._latest()

    def find_latest_in_progress(self) -> PuzzleSession | None:
        return self._latest(GameStatus.IN_PROGRESS)
