"""
Reconciliation of found variable references against declarations.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.markup import escape


@dataclass(frozen=True)
class ReconcileResult:
    """
    Outcome of comparing found variables with declared ones.

    Attributes:
        missing: Found names with no declaration, in scan order
        found: All found names, in scan order
        declared_count: Number of declared variables
    """

    missing: tuple[str, ...]
    found: tuple[str, ...]
    declared_count: int

    @property
    def ok(self) -> bool:
        return not self.missing


def reconcile(declared: Mapping[str, Any], found: Iterable[str]) -> ReconcileResult:
    """
    Compute the found variables that are not declared.

    Keys are compared exactly; no case folding or normalization.
    """
    found = tuple(found)
    missing = tuple(name for name in found if name not in declared)
    return ReconcileResult(missing=missing, found=found, declared_count=len(declared))


def render_report(result: ReconcileResult, source_label: str, console: Console) -> None:
    """
    Print one line per missing variable and a closing instruction.

    Args:
        result: Reconciliation outcome
        source_label: Declaration file path, or a description of an in-memory mapping
        console: Rich Console to print to
    """
    if result.ok:
        console.print("[green]All environment variables are declared correctly.[/green]")
        return

    for name in result.missing:
        console.print(
            f"[red]The environment variable [bold]{escape(name)}[/bold] is not declared.[/red]"
        )
    console.print(
        f"[yellow]Add the missing variables to {escape(source_label)} to continue.[/yellow]"
    )
