"""Rich-based logging setup and terminal output helpers for goldenlint."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table
from rich.theme import Theme

__all__ = [
    "console",
    "err_console",
    "configure_logging",
    "print_success",
    "print_warning",
    "print_error",
    "print_info",
    "create_table",
    "create_panel",
    "SEVERITY_STYLE",
]

_THEME = Theme(
    {
        "success": "bold green",
        "warning": "bold yellow",
        "error": "bold red",
        "info": "bold cyan",
        "muted": "dim",
        "accent": "bold magenta",
    }
)

SEVERITY_STYLE: dict[str, str] = {"error": "red", "warning": "yellow"}

console = Console(theme=_THEME)
err_console = Console(theme=_THEME, stderr=True)


def configure_logging(verbose: bool = False) -> None:
    """Route stdlib logging through Rich on stderr; DEBUG when *verbose*."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def print_success(message: str) -> None:
    console.print(f"[success]✔[/success] {message}")


def print_warning(message: str) -> None:
    console.print(f"[warning]⚠[/warning] {message}")


def print_error(message: str) -> None:
    console.print(f"[error]✖[/error] {message}")


def print_info(message: str) -> None:
    console.print(f"[info]ℹ[/info] {message}")


def create_table(
    title: str,
    columns: list[tuple[str, str]],
    rows: list[list[str]],
) -> Table:
    """Build a Rich table from (header, style) columns and string rows."""
    table = Table(title=title, show_lines=False, expand=True)
    for header, style in columns:
        table.add_column(header, style=style)
    for row in rows:
        table.add_row(*row)
    return table


def create_panel(content: str, title: str, style: str = "cyan") -> Panel:
    return Panel(content, title=title, border_style=style, expand=True)
