"""Rich console output utilities for the starterkit CLI."""

from typing import Any, Iterable

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from schemas.product import Product
from schemas.results import ResultEntry


console = Console()
error_console = Console(stderr=True)


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]✓[/green] {message}")


def print_error(message: str) -> None:
    """Print an error message to stderr."""
    error_console.print(f"[red]✗[/red] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[yellow]![/yellow] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[blue]→[/blue] {message}")


def print_results(entries: Iterable[ResultEntry]) -> None:
    """Print the result log as a {Status, Message} table."""
    entries = list(entries)
    if not entries:
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Status", justify="right")
    table.add_column("Message")

    for entry in entries:
        row = entry.as_row()
        color = "green" if entry.ok else "yellow" if entry.status < 400 else "red"
        table.add_row(f"[{color}]{row['Status']}[/{color}]", row["Message"])

    console.print(table)


def print_catalog(products: list[Product]) -> None:
    """Print catalog products as a table."""
    if not products:
        print_info("No packages found.")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Slug", style="cyan")
    table.add_column("Title")
    table.add_column("Available")

    for p in products:
        table.add_row(
            p.product_slug,
            p.product_title,
            "[green]Yes[/green]" if p.available else "[dim]No[/dim]",
        )

    console.print(table)


def print_config(sections: dict[str, dict[str, Any]]) -> None:
    """Print configuration sections, masking the auth token."""
    for name, values in sections.items():
        console.print(f"\n[bold]{escape(f'[{name}]')}[/bold]")
        for key, value in values.items():
            if key == "token" and value:
                value = f"{value[:4]}...{value[-4:]}" if len(value) > 12 else "***"
            console.print(f"  {key} = {value}")
