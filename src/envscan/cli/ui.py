"""
UI components module for the envscan CLI.

Provides styled terminal output using Rich library for scan results,
errors and status messages.
"""

from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from envscan.core.env_scanner import ScanResult


def _display_path(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def render_variables(result: ScanResult, root: Path, console: Console) -> None:
    """
    Render found variables as a table with the file each was first seen in.

    Args:
        result: Scan result to display.
        root: Project root, used to shorten file paths.
        console: Rich Console instance for output.
    """
    if not result.variables:
        console.print(
            f"[yellow]No environment variables found[/yellow] "
            f"({result.files_scanned} files scanned)"
        )
        return

    table = Table(
        title="Environment Variables",
        title_style="bold cyan",
        border_style="blue",
        show_header=True,
        header_style="bold white",
    )
    table.add_column("Variable", style="green", no_wrap=True)
    table.add_column("First seen in", style="dim cyan")

    for name in result.variables:
        table.add_row(escape(name), escape(_display_path(result.first_seen[name], root)))

    console.print(table)
    console.print(
        f"[bold]{len(result.variables)}[/bold] variables in "
        f"[bold]{result.files_scanned}[/bold] files"
    )


def render_plain(result: ScanResult, console: Console) -> None:
    """Print one variable name per line, without styling."""
    for name in result.variables:
        console.print(name, markup=False, highlight=False)


def render_error(message: str, console: Console) -> None:
    """
    Render an error message in a visually distinct red panel.

    Args:
        message: Error message to display.
        console: Rich Console instance for output.
    """
    error_text = Text()
    error_text.append("Error: ", style="bold red")
    error_text.append(message, style="red")

    console.print(
        Panel(
            error_text,
            border_style="red",
            title="[bold red]Error[/bold red]",
            expand=False,
        )
    )


def render_info(message: str, console: Console) -> None:
    """
    Render an informational message.

    Args:
        message: Info message to display.
        console: Rich Console instance for output.
    """
    console.print(f"[blue]Info:[/blue] {escape(message)}")
