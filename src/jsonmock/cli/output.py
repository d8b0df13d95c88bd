"""Console output for the jsonmock CLI.

Generated JSON is the only thing written to stdout, so it can be piped;
status lines (✓ and ✗) and tables for humans go through Rich. Colors are
off when ``NO_COLOR`` is set or ``--no-color`` is passed.
"""

from __future__ import annotations

import os
from typing import Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table


def create_console(no_color: bool = False, stderr: bool = False) -> Console:
    """Build a Rich console; ``NO_COLOR`` in the environment forces plain output."""
    plain = no_color or "NO_COLOR" in os.environ
    return Console(
        force_terminal=False if plain else None,
        no_color=plain,
        stderr=stderr,
    )


console = create_console()
err_console = create_console(stderr=True)


def _status(marker: str, message: str, **kwargs: Any) -> None:
    # Messages carry JSON paths like $.users[0]; never read them as markup.
    err_console.print(f"{marker} {escape(message)}", **kwargs)


def success(message: str, **kwargs: Any) -> None:
    """Report a finished step on stderr.

    Example:
        >>> success("Generated result.json")
        ✓ Generated result.json
    """
    _status("[green]✓[/green]", message, **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Report a failure on stderr.

    Example:
        >>> error("$.name: Unknown generator function 'fistName'. Available: ...")
        ✗ $.name: Unknown generator function 'fistName'. Available: ...
    """
    _status("[red]✗[/red]", message, **kwargs)


def print_json_text(text: str) -> None:
    """Write JSON text to stdout as is, bypassing Rich wrapping and markup."""
    click.echo(text)


def print_table(title: str, columns: list[str], rows: list[tuple[str, ...]]) -> None:
    """Print a table with one header per column to stdout."""
    table = Table(title=title)
    for column in columns:
        table.add_column(column)
    for row in rows:
        table.add_row(*row)
    console.print(table)


def set_no_color(no_color: bool) -> None:
    """Rebuild both module consoles with or without color."""
    global console, err_console
    console = create_console(no_color=no_color)
    err_console = create_console(no_color=no_color, stderr=True)
