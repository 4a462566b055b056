from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from decodey.adapters.quotes.yaml_provider import YamlQuoteProvider
from decodey.core.config import load_config
from decodey.core.errors import QuoteNotFoundError


def quotes_validate(path: Path) -> None:
    console = Console()
    provider = YamlQuoteProvider(path)
    try:
        issues = provider.validate()
    except OSError as exc:
        console.print(f"[red]Failed to read quotes: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    if issues:
        console.print("[red]Quotes validation failed:[/red]")
        for issue in issues:
            location = issue.path or "quotes"
            console.print(f"- {location}: {issue.message}")
        raise typer.Exit(code=1)
    console.print("[green]Quotes file is valid.[/green]")


def quotes_list(path: Path | None = None) -> None:
    console = Console()
    if path is None:
        configured = load_config().quotes_path
        path = Path(configured) if configured else None
    provider = YamlQuoteProvider(path)
    try:
        quotes = provider.quotes()
    except QuoteNotFoundError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    table = Table(title=f"Quotes ({provider.source})")
    table.add_column("ID")
    table.add_column("Author")
    table.add_column("Letters", justify="right")
    for quote in quotes:
        letters = sum(1 for char in quote.text.upper() if "A" <= char <= "Z")
        table.add_row(quote.id, quote.author, str(letters))
    console.print(table)
