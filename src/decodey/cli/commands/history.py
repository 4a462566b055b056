from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from decodey.adapters.storage.session_store import SessionStore
from decodey.cli.ui.board import render_history
from decodey.core.config import default_data_dir
from decodey.core.errors import StorageError


def history_command(data_dir: Path | None = None) -> None:
    console = Console()
    try:
        store = SessionStore(data_dir or default_data_dir())
        summaries = store.list_sessions()
    except StorageError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    if not summaries:
        console.print("[yellow]No saved games yet.[/yellow]")
        return
    render_history(summaries, console)
