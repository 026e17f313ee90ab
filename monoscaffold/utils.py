"""Shared utility functions for monoscaffold.

Provides tool discovery, duration formatting and Rich-based console
reporting used by the pipeline.
"""

from __future__ import annotations

import shutil

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# Tool discovery
# ---------------------------------------------------------------------------


def command_exists(name: str) -> bool:
    """Return ``True`` if *name* resolves to an executable on ``PATH``."""
    return shutil.which(name) is not None


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Format a duration in seconds to a human-readable string.

    Examples::

        format_duration(0.42)  -> "0.4s"
        format_duration(65.2)  -> "1m 5s"
    """
    if seconds < 0:
        return "0.0s"

    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes > 0:
        return f"{minutes}m {int(secs)}s"
    return f"{secs:.1f}s"


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


STAGE_COLORS: dict[str, str] = {
    "PREFLIGHT": "bright_cyan",
    "DECLARING": "bright_green",
    "ASSEMBLING": "bright_yellow",
    "FINALIZING": "bright_magenta",
}


def print_stage_header(number: int, name: str) -> None:
    """Print a full-width rule announcing a pipeline stage."""
    color = STAGE_COLORS.get(name.upper(), "white")
    console.print()
    console.print(
        Rule(
            f"[bold {color}] Stage {number}: {name.upper()} [/bold {color}]",
            style=color,
        )
    )


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
