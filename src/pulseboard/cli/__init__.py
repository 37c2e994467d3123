"""Pulseboard CLI."""

import typer

from pulseboard.cli._console import console
from pulseboard.cli.export import export
from pulseboard.cli.serve import serve
from pulseboard.cli.watch import watch

app = typer.Typer(
    name="pulseboard",
    help="Live per-endpoint request count dashboard.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        from pulseboard import __version__

        console.print(f"[bold]pulseboard[/bold] [dim]{__version__}[/dim]")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show version",
    ),
) -> None:
    """Request counts per endpoint, filtered, paged and exported."""


# Register commands
app.command()(serve)
app.command()(watch)
app.command()(export)
