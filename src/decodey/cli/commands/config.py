from __future__ import annotations

import typer
from rich.console import Console

from decodey.core.config import DecodeyConfig, config_path, load_config, save_config, update_config

_NONE_VALUES = {"", "none", "null"}


def config_show() -> None:
    console = Console()
    config = load_config()
    console.print(f"[bold]Config file:[/bold] {config_path()}")
    for key in DecodeyConfig.__struct_fields__:
        console.print(f"{key} = {getattr(config, key)}")


def config_set(key: str, value: str) -> None:
    console = Console()
    new_value: str | None = value
    if key == "quotes_path" and value.strip().lower() in _NONE_VALUES:
        new_value = None
    try:
        updated = update_config(load_config(), key, new_value)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1) from exc
    try:
        path = save_config(updated)
    except OSError as exc:
        console.print(f"[red]Failed to write config: {exc}[/red]")
        raise typer.Exit(code=1) from exc
    console.print(f"[green]Set {key} in {path}[/green]")
