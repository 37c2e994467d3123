"""Shared console output for the pulseboard CLI."""

import logging
import os

from rich.box import ROUNDED
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

# Force colors unless explicitly disabled (NO_COLOR standard)
no_color = os.environ.get("NO_COLOR", "").lower() in ("1", "true", "yes")

console = Console(
    highlight=False,
    force_terminal=not no_color,
    no_color=no_color,
)


def success(msg: str) -> None:
    console.print(f"  [green]✓[/green] {msg}")


def nl() -> None:
    console.print()


def error_panel(msg: str, *, title: str = "Failed") -> None:
    """Print a styled error panel."""
    text = Text()
    text.append("✗ ", style="red bold")
    text.append(title, style="red")
    text.append("\n\n")
    text.append(msg, style="dim")
    console.print(
        Panel(text, border_style="red dim", box=ROUNDED, padding=(0, 1), expand=False)
    )


def setup_logging(verbose: bool = False) -> None:
    """Route logging through rich so it does not tear live displays."""
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    handler = RichHandler(
        console=console,
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(message)s", handlers=[handler], force=True)
    logging.getLogger("pulseboard").setLevel(level)
