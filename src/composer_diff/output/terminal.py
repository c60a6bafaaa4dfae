"""Rich terminal reporter."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.table import Table
from rich.text import Text

from composer_diff.diff.models import ComposerDiff, LockedPackage, Operation
from composer_diff.output.common import operation_label, sorted_entries

_OPERATION_STYLE = {
    "added": "bold green",
    "removed": "bold red",
    "updated": "bold yellow",
    "moved": "bold magenta",
}


def _operation_text(operation: Operation) -> Text:
    key = operation.change.value if operation.change else "moved"
    return Text(operation_label(operation), style=_OPERATION_STYLE[key])


def _version(pkg: Optional[LockedPackage]) -> Text:
    if pkg is None:
        return Text("absent", style="dim")
    return Text(pkg.version)


def render(
    diff: ComposerDiff,
    *,
    path: str = "composer.json",
    base_ref: str = "",
    head_ref: str = "",
    show_summary: bool = True,
    console: Optional[Console] = None,
) -> None:
    """Print the diff to the terminal using Rich."""
    console = console or Console(stderr=True)

    if diff.is_empty:
        console.print()
        console.print(f"[bold green]No dependency changes in {path}.[/bold green]")
        return

    if diff.manifest:
        console.print()
        table = Table(
            title=f"Changes to requirements ({path})",
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Package", style="cyan", min_width=20)
        table.add_column("Section")
        table.add_column("Operation")
        table.add_column("Base")
        table.add_column("Head")
        for entry in sorted_entries(diff.manifest.values()):
            table.add_row(
                entry.name,
                entry.section.label,
                _operation_text(entry.operation),
                entry.base or "",
                entry.head or "",
            )
        console.print(table)

    if diff.lock:
        console.print()
        table = Table(
            title="Changes to locked packages",
            title_style="bold",
            border_style="dim",
        )
        table.add_column("Package", style="cyan", min_width=20)
        table.add_column("Section")
        table.add_column("Direct", justify="center")
        table.add_column("Operation")
        table.add_column("Base", justify="right")
        table.add_column("Head", justify="right")
        table.add_column("Link", style="blue", overflow="fold")
        for entry in sorted_entries(diff.lock.values()):
            table.add_row(
                entry.name,
                entry.section.label,
                "yes" if entry.direct else "no",
                _operation_text(entry.operation),
                _version(entry.base),
                _version(entry.head),
                entry.link or "",
            )
        console.print(table)

    if show_summary:
        _print_summary(console, diff, base_ref, head_ref)


def _print_summary(console: Console, diff: ComposerDiff, base_ref: str, head_ref: str) -> None:
    direct = sum(1 for e in diff.lock.values() if e.direct)
    console.print()
    if base_ref and head_ref:
        console.print(f"[dim]Compared:[/dim]      {base_ref} → {head_ref}")
    console.print(f"[dim]Requirements:[/dim]  {len(diff.manifest)}")
    console.print(f"[dim]Locked:[/dim]        {len(diff.lock)}")
    console.print(f"[dim]Direct:[/dim]        {direct}")
    console.print(f"[dim]Transitive:[/dim]    {len(diff.lock) - direct}")
