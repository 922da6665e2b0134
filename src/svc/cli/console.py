"""Shared console utilities for CLI commands."""

from rich.console import Console
from rich.markup import escape
from rich.table import Table

# Shared console instances for all CLI commands
console = Console()
err_console = Console(stderr=True)


def error(msg: str) -> None:
    """Print an error message in red on stderr."""
    err_console.print(f"[red]{escape(msg)}[/red]")


def success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{escape(msg)}[/green]")


def dim(msg: str) -> None:
    """Print a dimmed message."""
    console.print(f"[dim]{escape(msg)}[/dim]")


def create_table(
    title: str,
    columns: list[tuple[str, str | dict]],
) -> Table:
    """Create a styled table with consistent formatting.

    Args:
        title: Table title.
        columns: List of (name, style) or (name, kwargs_dict) tuples.

    Returns:
        Configured Rich Table.
    """
    table = Table(title=title)
    for name, style_or_kwargs in columns:
        if isinstance(style_or_kwargs, dict):
            table.add_column(name, **style_or_kwargs)
        else:
            table.add_column(name, style=style_or_kwargs)
    return table
