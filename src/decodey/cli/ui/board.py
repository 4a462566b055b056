from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text

from decodey.core.models.enums import GameStatus
from decodey.core.models.session import PuzzleSession, SessionSummary
from decodey.core.scoring import time_bonus
from decodey.core.state import board_cells, letter_statuses


def _board_text(session: PuzzleSession) -> tuple[Text, Text]:
    cipher_row = Text()
    display_row = Text()
    for cell in board_cells(session):
        if not cell.is_letter:
            cipher_row.append(cell.cipher)
            display_row.append(cell.display)
            continue
        style = "bold green" if cell.solved else "bold cyan"
        if cell.selected:
            style = "reverse bold yellow"
        cipher_row.append(cell.cipher, style=style)
        display_row.append(cell.display, style="green" if cell.solved else "dim")
    return cipher_row, display_row


def render_board(session: PuzzleSession, console: Console) -> None:
    cipher_row, display_row = _board_text(session)
    console.print()
    console.print(cipher_row)
    console.print(display_row)

    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 1))
    table.add_column("Letter")
    statuses = letter_statuses(session)
    for status in statuses:
        table.add_column(status.cipher, justify="center")
    table.add_row("count", *(str(status.count) for status in statuses))
    table.add_row("plain", *(status.plain or "·" for status in statuses))
    console.print(table)

    remaining = session.remaining_hints
    colour = "red" if remaining <= 1 else "yellow" if remaining <= 2 else "green"
    console.print(
        f"Mistakes: {session.mistake_count}/{session.max_mistakes}  "
        f"[{colour}]Hints left: {remaining}[/{colour}]"
    )


def render_result(session: PuzzleSession, score: int, console: Console) -> None:
    if session.status == GameStatus.WON:
        console.print("\n[bold green]Decoded![/bold green]")
    else:
        console.print("\n[bold red]Out of mistakes.[/bold red]")
    console.print(f"[bold]{session.source_text}[/bold]")
    if session.author:
        console.print(f"[dim]-- {session.author}[/dim]")

    table = Table(title="Game Summary")
    table.add_column("Field")
    table.add_column("Value", justify="right")
    table.add_row("Difficulty", session.difficulty.value)
    table.add_row("Mistakes", f"{session.mistake_count}/{session.max_mistakes}")
    table.add_row("Time (s)", str(session.elapsed_seconds))
    table.add_row("Time bonus", str(time_bonus(session.elapsed_seconds)))
    table.add_row("Score", str(score))
    console.print(table)


def render_history(summaries: list[SessionSummary], console: Console) -> None:
    table = Table(title="Saved Games")
    table.add_column("ID")
    table.add_column("Started")
    table.add_column("Difficulty")
    table.add_column("Status", no_wrap=True)
    table.add_column("Mistakes", justify="right")
    for summary in summaries:
        table.add_row(
            summary.id[:8],
            summary.started_at.strftime("%Y-%m-%d %H:%M"),
            summary.difficulty.value,
            summary.status.value,
            str(summary.mistake_count),
        )
    console.print(table)
