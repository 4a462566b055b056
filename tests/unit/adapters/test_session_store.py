from __future__ import annotations

import random
import time
from datetime import UTC, datetime
from pathlib import Path

import msgspec
import pytest

from decodey.adapters.storage import session_store as session_store_module
from decodey.adapters.storage.session_store import SessionStore
from decodey.core.errors import StorageError
from decodey.core.models.enums import GameStatus
from decodey.core.models.session import PuzzleSession
from decodey.core.state import new_puzzle

T0 = datetime(2025, 5, 7, 12, 0, 0, tzinfo=UTC)


def _session_id(seed: int) -> str:
    return f"{seed:032x}"


def _make_session(seed: int, status: GameStatus = GameStatus.IN_PROGRESS) -> PuzzleSession:
    session = new_puzzle(
        "medium", "HELLO WORLD", random.Random(seed), now=T0, session_id=_session_id(seed)
    )
    if status == GameStatus.WON:
        return msgspec.structs.replace(session, is_won=True)
    if status == GameStatus.LOST:
        return msgspec.structs.replace(session, is_lost=True, mistake_count=5)
    return session


def test_session_store_save_load(tmp_path: Path):
    store = SessionStore(tmp_path)
    session = _make_session(1)
    saved_path = store.save(session)
    assert saved_path.exists()
    assert saved_path.name == f"game-{_session_id(1)}.json"
    assert store.load(_session_id(1)) == session


def test_session_store_load_missing_returns_none(tmp_path: Path):
    assert SessionStore(tmp_path).load(_session_id(2)) is None


def test_session_store_load_invalid_id_returns_none(tmp_path: Path):
    assert SessionStore(tmp_path).load("bad-id") is None


def test_session_store_load_decode_error_returns_none(monkeypatch, tmp_path: Path):
    store = SessionStore(tmp_path)
    session = _make_session(10)
    store.save(session)

    def boom(_data):
        raise msgspec.DecodeError("bad")

    monkeypatch.setattr(session_store_module, "decode_session", boom)
    assert store.load(session.id) is None


def test_save_rejects_invalid_id(tmp_path: Path):
    store = SessionStore(tmp_path)
    session = msgspec.structs.replace(_make_session(3), id="../escape")
    with pytest.raises(StorageError, match="Invalid session id"):
        store.save(session)


def test_save_write_failure_raises_storage_error(monkeypatch, tmp_path: Path):
    store = SessionStore(tmp_path)

    def fail(path, data):
        raise OSError("read-only")

    monkeypatch.setattr(session_store_module, "atomic_write_bytes", fail)
    with pytest.raises(StorageError, match="read-only"):
        store.save(_make_session(4))


def test_update_requires_existing_session(tmp_path: Path):
    store = SessionStore(tmp_path)
    session = _make_session(5)
    with pytest.raises(StorageError, match="No saved session"):
        store.update(session, session.id)
    store.save(session)
    updated = msgspec.structs.replace(session, mistake_count=2)
    store.update(updated, session.id)
    assert store.load(session.id).mistake_count == 2


def test_update_rejects_mismatched_id(tmp_path: Path):
    store = SessionStore(tmp_path)
    session = _make_session(6)
    store.save(session)
    with pytest.raises(StorageError, match="does not match"):
        store.update(session, _session_id(7))


def test_load_most_recent_and_latest_in_progress(tmp_path: Path):
    store = SessionStore(tmp_path)
    (tmp_path / "game-corrupt.json").write_text("bad", encoding="utf-8")
    store.save(_make_session(8))
    time.sleep(0.01)
    store.save(_make_session(9, GameStatus.WON))
    most_recent = store.load_most_recent()
    assert most_recent is not None and most_recent.id == _session_id(9)
    in_progress = store.find_latest_in_progress()
    assert in_progress is not None and in_progress.id == _session_id(8)


def test_load_most_recent_empty_store(tmp_path: Path):
    store = SessionStore(tmp_path)
    assert store.load_most_recent() is None
    assert store.find_latest_in_progress() is None


def test_list_sessions_newest_first(tmp_path: Path):
    store = SessionStore(tmp_path)
    store.save(_make_session(11))
    time.sleep(0.01)
    store.save(_make_session(12, GameStatus.LOST))
    summaries = store.list_sessions()
    assert [summary.id for summary in summaries] == [_session_id(12), _session_id(11)]
    assert summaries[0].status == GameStatus.LOST
    assert summaries[0].mistake_count == 5


def test_index_is_rebuilt_when_corrupt(tmp_path: Path):
    store = SessionStore(tmp_path)
    store.save(_make_session(13))
    (tmp_path / "game-index.json").write_text("not-json", encoding="utf-8")
    summaries = SessionStore(tmp_path).list_sessions()
    assert [summary.id for summary in summaries] == [_session_id(13)]


def test_load_from_path(tmp_path: Path):
    store = SessionStore(tmp_path)
    session = _make_session(14)
    path = store.save(session)
    assert store.load_from_path(path) == session


def test_load_from_path_rejects_other_files(tmp_path: Path):
    store = SessionStore(tmp_path)
    other = tmp_path / "notes.json"
    other.write_text("{}", encoding="utf-8")
    with pytest.raises(ValueError, match="game-<id>.json"):
        store.load_from_path(other)
