"""CLI app with deferred heavy imports."""

from pathlib import Path

import typer

app = typer.Typer(
    name="decodey",
    help="decodey - Crack substitution-cipher quotes in your terminal",
    no_args_is_help=True,
    add_completion=False,
)

quotes_app = typer.Typer(help="Inspect and validate quote collections")
config_app = typer.Typer(help="View and change settings")


@app.command()
def play(
    difficulty: str | None = typer.Option(
        None, "--difficulty", "-d", help="easy (8 mistakes), medium (5) or hard (3)"
    ),
    seed: int | None = typer.Option(None, "--seed", help="Seed for a reproducible puzzle"),
    resume: bool = typer.Option(False, "--resume", help="Continue the latest unfinished game"),
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Override save directory"),
    quotes: Path | None = typer.Option(
        None, "--quotes", exists=True, readable=True, help="YAML file of quotes to draw from"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    from decodey.cli.commands.play import play_command
    from decodey.logging import configure_logging

    configure_logging(verbose=verbose)
    play_command(
        difficulty=difficulty,
        seed=seed,
        resume=resume,
        data_dir=data_dir,
        quotes_path=quotes,
    )


@app.command()
def history(
    data_dir: Path | None = typer.Option(None, "--data-dir", help="Override save directory"),
) -> None:
    from decodey.cli.commands.history import history_command

    history_command(data_dir=data_dir)


@app.command()
def report(
    session: Path = typer.Argument(..., exists=True, readable=True),
    format: str = typer.Option("json", "--format", "-f"),
    output: Path | None = typer.Option(None, "--output", "-o"),
    overwrite: bool = typer.Option(False, "--overwrite"),
) -> None:
    from decodey.cli.commands.report import report_command

    report_command(
        session_path=session,
        format=format,
        output_path=output,
        overwrite=overwrite,
    )


@app.command()
def info() -> None:
    from decodey.cli.commands.info import info_command

    info_command()


@quotes_app.command("validate")
def quotes_validate(
    path: Path = typer.Argument(..., exists=True, readable=True),
) -> None:
    from decodey.cli.commands.quotes import quotes_validate as quotes_validate_command

    quotes_validate_command(path)


@quotes_app.command("list")
def quotes_list(
    quotes: Path | None = typer.Option(None, "--quotes", exists=True, readable=True),
) -> None:
    from decodey.cli.commands.quotes import quotes_list as quotes_list_command

    quotes_list_command(quotes)


@config_app.command("show")
def config_show() -> None:
    from decodey.cli.commands.config import config_show as config_show_command

    config_show_command()


@config_app.command("set")
def config_set(
    key: str = typer.Argument(...),
    value: str = typer.Argument(...),
) -> None:
    from decodey.cli.commands.config import config_set as config_set_command

    config_set_command(key, value)


app.add_typer(quotes_app, name="quotes")
app.add_typer(config_app, name="config")
