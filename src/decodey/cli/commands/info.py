from __future__ import annotations

import platform
from pathlib import Path

from rich.console import Console

from decodey import __version__
from decodey.adapters.quotes.yaml_provider import YamlQuoteProvider
from decodey.core.config import config_path, default_data_dir, load_config
from decodey.core.errors import QuoteNotFoundError


def info_command() -> None:
    console = Console()
    config = load_config()
    provider = YamlQuoteProvider(Path(config.quotes_path) if config.quotes_path else None)
    try:
        quote_count = str(len(provider.quotes()))
    except QuoteNotFoundError:
        quote_count = "unavailable"

    console.print(f"[bold]decodey version:[/bold] {__version__}")
    console.print(f"[bold]Python:[/bold] {platform.python_version()}")
    console.print(f"[bold]Config file:[/bold] {config_path()}")
    console.print(f"[bold]Data directory:[/bold] {default_data_dir()}")
    console.print(f"[bold]Quotes:[/bold] {provider.source} ({quote_count})")
