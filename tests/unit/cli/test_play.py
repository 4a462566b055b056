from __future__ import annotations

import random
from pathlib import Path

import pytest
from rich.console import Console
from typer.testing import CliRunner

from decodey.adapters.storage.session_store import SessionStore
from decodey.cli.app import app
from decodey.cli.commands import play as play_module
from decodey.cli.ui.prompts import Move, MoveKind
from decodey.core.cipher import generate_mapping

SEED = 42

SINGLE_QUOTE = """
quotes:
  - id: "hello"
    text: "Hello world"
    author: "Test Author"
"""


def _mapping(seed: int) -> dict[str, str]:
    """Mirror the play command's draws: one quote choice, then the cipher shuffle."""
    rng = random.Random(seed)
    rng.choice(["hello"])
    return generate_mapping(rng)


@pytest.fixture
def quotes_path(quotes_file) -> Path:
    return quotes_file(SINGLE_QUOTE)


@pytest.fixture
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "saves"


def _play(data_dir: Path, quotes_path: Path, user_input: str, *extra: str):
    runner = CliRunner()
    args = [
        "play",
        "--seed",
        str(SEED),
        "--data-dir",
        str(data_dir),
        "--quotes",
        str(quotes_path),
        *extra,
    ]
    return runner.invoke(app, args, input=user_input)


def test_play_win_with_shortcut_guesses(data_dir, quotes_path):
    mapping = _mapping(SEED)
    moves = "".join(f"{mapping[plain]}{plain}\n" for plain in "HELOWRD")
    result = _play(data_dir, quotes_path, moves, "--difficulty", "easy")
    assert result.exit_code == 0, result.output
    assert "Decoded!" in result.output
    assert "HELLO WORLD" in result.output
    assert "Test Author" in result.output
    saved = SessionStore(data_dir).load_most_recent()
    assert saved is not None
    assert saved.is_won is True
    assert saved.mistake_count == 0


def test_play_select_then_guess(data_dir, quotes_path):
    mapping = _mapping(SEED)
    moves = "".join(f"{mapping[plain]}\n{plain}\n" for plain in "HELOWRD")
    result = _play(data_dir, quotes_path, moves)
    assert result.exit_code == 0, result.output
    assert "Decoded!" in result.output
    assert f"Correct: {mapping['L']} is L." in result.output


def test_play_wrong_guess_reported(data_dir, quotes_path):
    mapping = _mapping(SEED)
    result = _play(data_dir, quotes_path, f"{mapping['H']}Z\nquit\n")
    assert result.exit_code == 0, result.output
    assert f"Wrong: {mapping['H']} is not Z." in result.output
    saved = SessionStore(data_dir).load_most_recent()
    assert saved is not None and saved.mistake_count == 1


def test_play_hints_until_loss(data_dir, quotes_path):
    result = _play(data_dir, quotes_path, "?\n?\n?\n", "--difficulty", "hard")
    assert result.exit_code == 0, result.output
    assert result.output.count("Hint used") == 3
    assert "Out of mistakes." in result.output
    assert "HELLO WORLD" in result.output


def test_play_rejects_solved_letter(data_dir, quotes_path):
    mapping = _mapping(SEED)
    cipher_h = mapping["H"]
    result = _play(data_dir, quotes_path, f"{cipher_h}H\n{cipher_h}\nquit\n")
    assert result.exit_code == 0, result.output
    assert f"{cipher_h} is already solved or not in this puzzle." in result.output


def test_play_quit_and_resume(data_dir, quotes_path):
    mapping = _mapping(SEED)
    first = _play(data_dir, quotes_path, f"{mapping['H']}H\nquit\n", "--difficulty", "hard")
    assert first.exit_code == 0, first.output
    assert "Game saved" in first.output

    moves = "".join(f"{mapping[plain]}{plain}\n" for plain in "ELOWRD")
    runner = CliRunner()
    second = runner.invoke(
        app,
        ["play", "--resume", "--data-dir", str(data_dir)],
        input=moves,
    )
    assert second.exit_code == 0, second.output
    assert "Resuming game" in second.output
    assert "(1/7 letters solved)" in second.output
    assert "Decoded!" in second.output


def test_play_end_of_input_keeps_game(data_dir, quotes_path):
    result = _play(data_dir, quotes_path, "")
    assert result.exit_code == 0
    assert "Interrupted" in result.output
    assert SessionStore(data_dir).find_latest_in_progress() is not None


def test_play_unknown_difficulty(data_dir, quotes_path):
    result = _play(data_dir, quotes_path, "", "--difficulty", "extreme")
    assert result.exit_code == 1
    assert "Unknown difficulty" in result.output


def test_play_resume_without_saved_game(data_dir):
    result = CliRunner().invoke(app, ["play", "--resume", "--data-dir", str(data_dir)])
    assert result.exit_code == 1
    assert "No in-progress game" in result.output


def test_play_resume_conflicts_with_difficulty(data_dir):
    result = CliRunner().invoke(
        app, ["play", "--resume", "--difficulty", "easy", "--data-dir", str(data_dir)]
    )
    assert result.exit_code == 1
    assert "cannot be combined" in result.output


def test_select_move_without_letter_is_ignored(monkeypatch):
    selected = []

    class RecordingEngine:
        def select_letter(self, letter):
            selected.append(letter)
            return letter

    monkeypatch.setattr(play_module, "ask_move", lambda console: Move(MoveKind.SELECT))
    assert play_module._play_turn(RecordingEngine(), Console()) is True
    assert selected == []
