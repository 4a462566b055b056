from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from decodey.adapters.quotes.yaml_provider import YamlQuoteProvider
from decodey.adapters.storage.session_store import SessionStore
from decodey.cli.ui.board import render_board, render_result
from decodey.cli.ui.prompts import MoveKind, ask_guess, ask_move
from decodey.core.config import default_data_dir, load_config
from decodey.core.engine import PuzzleEngine
from decodey.core.errors import StorageError
from decodey.core.models.enums import Difficulty
from decodey.core.utils import make_rng
from decodey.logging import get_logger

log = get_logger(__name__)


def _parse_difficulty(value: str | None, default: Difficulty) -> Difficulty:
    if value is None:
        return default
    try:
        return Difficulty(value.strip().lower())
    except ValueError as exc:
        valid = ", ".join(level.value for level in Difficulty)
        raise ValueError(f"Unknown difficulty: {value}. Use one of: {valid}.") from exc


def _play_turn(engine: PuzzleEngine, console: Console) -> bool:
    """Run one player action; returns False when the player quits."""
    move = ask_move(console)
    if move.kind == MoveKind.QUIT:
        return False
    if move.kind == MoveKind.HINT:
        if engine.request_hint():
            console.print("[yellow]Hint used - one letter revealed.[/yellow]")
        else:
            console.print("[yellow]No letters left to reveal.[/yellow]")
        return True

    if move.letter is None:
        return True
    selected = engine.select_letter(move.letter)
    if selected is None:
        console.print(f"[yellow]{move.letter} is already solved or not in this puzzle.[/yellow]")
        return True
    guess = move.guess or ask_guess(console, selected)
    if engine.submit_guess(guess):
        console.print(f"[green]Correct: {selected} is {guess}.[/green]")
    else:
        console.print(f"[red]Wrong: {selected} is not {guess}.[/red]")
    return True


def play_command(
    difficulty: str | None,
    seed: int | None,
    resume: bool,
    data_dir: Path | None,
    quotes_path: Path | None,
) -> None:
    console = Console()
    config = load_config()
    try:
        level = _parse_difficulty(difficulty, config.default_difficulty)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    if resume and difficulty is not None:
        console.print("[red]Resume cannot be combined with --difficulty.[/red]")
        raise typer.Exit(code=1)

    try:
        store = SessionStore(data_dir or default_data_dir())
    except StorageError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    rng = make_rng(seed)
    if quotes_path is None and config.quotes_path:
        quotes_path = Path(config.quotes_path)
    provider = YamlQuoteProvider(quotes_path, rng=rng)
    engine = PuzzleEngine(quotes=provider, storage=store, rng=rng, config=config)

    if resume:
        try:
            session = store.find_latest_in_progress()
        except StorageError as exc:
            console.print(f"[red]{exc}[/red]")
            raise typer.Exit(code=1) from exc
        if session is None:
            console.print("[red]No in-progress game found to resume.[/red]")
            raise typer.Exit(code=1)
        engine.resume(session)
        console.print(
            f"[yellow]Resuming game {session.id} "
            f"({len(session.guessed_map)}/{len(session.letter_frequency)} letters solved)[/yellow]"
        )
    else:
        engine.new_game(level)
        console.print(
            f"[bold]New {engine.session.difficulty.value} puzzle[/bold] "
            f"- {engine.session.max_mistakes} mistakes allowed, hints cost one each."
        )

    try:
        while not engine.session.is_terminal:
            render_board(engine.session, console)
            if not _play_turn(engine, console):
                console.print("[yellow]Game saved. Resume later with --resume.[/yellow]")
                raise typer.Exit(0)
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Interrupted. Game saved; resume later with --resume.[/yellow]")
        raise typer.Exit(0) from None

    render_board(engine.session, console)
    render_result(engine.session, engine.score(), console)
    log.debug(
        "play_command_finished",
        session_id=engine.session.id,
        status=engine.session.status.value,
    )
