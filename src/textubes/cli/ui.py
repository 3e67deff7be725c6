"""
Rich console helpers for the Textubes CLI.
"""

from rich.console import Console
from rich.style import Style
from rich.table import Table
from rich.text import Text

from textubes.core.registry import NODE_TYPE_DEFINITIONS

console = Console()
err_console = Console(stderr=True)

STYLES = {
    "success": Style(color="green", bold=True),
    "error": Style(color="red", bold=True),
    "warning": Style(color="yellow"),
    "muted": Style(color="bright_black"),
}


def print_success(message: str) -> None:
    console.print(Text(f"✓ {message}", style=STYLES["success"]))


def print_error(message: str) -> None:
    err_console.print(Text(f"✗ {message}", style=STYLES["error"]))


def print_warning(message: str) -> None:
    err_console.print(Text(f"⚠ {message}", style=STYLES["warning"]))


def print_diagnostics(errors: list[str], warnings: list[str]) -> None:
    """Print validation errors and warnings."""
    if errors:
        err_console.print(Text("Validation failed:", style=STYLES["error"]))
        for err in errors:
            print_error(err)

    if warnings:
        err_console.print(Text("Validation warnings:", style=STYLES["warning"]))
        for warn in warnings:
            print_warning(warn)


def node_types_table() -> Table:
    """Table of every node type the compiler can emit."""
    table = Table(title="Node types")
    table.add_column("Type", style="cyan", no_wrap=True)
    table.add_column("Label")
    table.add_column("Category", style="magenta")
    table.add_column("Description", style=STYLES["muted"])

    for definition in NODE_TYPE_DEFINITIONS.values():
        table.add_row(
            definition.node_type.value,
            definition.label,
            definition.category,
            definition.description,
        )
    return table
