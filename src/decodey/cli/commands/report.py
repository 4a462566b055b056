from __future__ import annotations

from pathlib import Path

import typer
from msgspec import DecodeError
from rich.console import Console

from decodey.adapters.reporters.json import JsonReporter
from decodey.adapters.reporters.markdown import MarkdownReporter
from decodey.adapters.storage.session_store import SessionStore
from decodey.core.config import load_config
from decodey.core.errors import StorageError
from decodey.core.utils import atomic_write_bytes

_REPORTERS: dict[str, type[JsonReporter] | type[MarkdownReporter]] = {
    "json": JsonReporter,
    "md": MarkdownReporter,
    "markdown": MarkdownReporter,
}


def report_command(
    session_path: Path,
    format: str,
    output_path: Path | None,
    overwrite: bool,
) -> None:
    console = Console()
    if session_path.suffix.lower() != ".json":
        console.print("[red]Session file must be a .json file.[/red]")
        raise typer.Exit(code=1)
    if not session_path.is_file():
        console.print("[red]Session path must be a file.[/red]")
        raise typer.Exit(code=1)
    reporter_cls = _REPORTERS.get(format.lower())
    if reporter_cls is None:
        valid_formats = ", ".join(sorted(_REPORTERS.keys()))
        console.print(f"[red]Unsupported format: {format}. Use one of: {valid_formats}.[/red]")
        raise typer.Exit(code=1)
    try:
        store = SessionStore(session_path.parent)
        session = store.load_from_path(session_path)
    except (OSError, ValueError, TypeError, DecodeError, StorageError) as exc:
        console.print(f"[red]Failed to read session file: {exc}[/red]")
        raise typer.Exit(code=1) from exc

    reporter = reporter_cls()
    content = reporter.generate(session, load_config())

    if output_path is None:
        output_path = session_path.with_suffix(f".{reporter.file_extension}")
        if output_path == session_path:
            output_path = session_path.with_name(f"{session_path.stem}-record.json")
    if output_path.exists():
        if output_path.is_dir():
            console.print("[red]Output path is a directory.[/red]")
            raise typer.Exit(code=1)
        if not overwrite:
            console.print("[red]Output file already exists. Use --overwrite to replace.[/red]")
            raise typer.Exit(code=1)
    if not output_path.parent.exists() or not output_path.parent.is_dir():
        console.print("[red]Output directory does not exist.[/red]")
        raise typer.Exit(code=1)
    atomic_write_bytes(output_path, content)
    console.print(f"[green]Report written to {output_path}[/green]")
