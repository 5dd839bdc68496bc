"""
Utility functions for cluttercut.

Includes:
- JSON report helper
- Console output helpers (rich)
- Friendly hints for raw OS error text
"""

import json
from pathlib import Path
from typing import Any
from rich.console import Console
from rich.table import Table
from rich.tree import Tree
from rich.panel import Panel
from rich.markup import escape

from .contracts import DirectoryEntry, ExecutionResult, TouchedFolder
from .preview import Preview

# Global console instance
console = Console()

# Known substrings of OS error text -> hint shown to the user
FAILURE_HINTS = {
    "Permission denied": "cluttercut is not allowed to move this file. Check its permissions.",
    "Operation not permitted": "The operating system blocked this move. Check the file's permissions.",
    "No such file or directory": "The file disappeared before it could be moved.",
    "Cross-device link": "The destination is on a different drive.",
    "Read-only file system": "The folder is on a read-only drive.",
    "File exists": "Something with the destination folder's name already exists and is not a folder.",
    "Not a directory": "Something with the destination folder's name already exists and is not a folder.",
}


def print_header(title: str, subtitle: str = ""):
    """Print a styled header."""
    console.print(Panel(f"[bold blue]{title}[/bold blue]\n[italic]{subtitle}[/italic]", expand=False))


def print_error(msg: str):
    console.print(f"[bold red]ERROR:[/bold red] {msg}")


def print_warning(msg: str):
    console.print(f"[bold yellow]WARNING:[/bold yellow] {msg}")


def print_success(msg: str):
    console.print(f"[bold green]SUCCESS:[/bold green] {msg}")


def describe_failure(reason: str) -> str | None:
    """Return a user-facing hint for a raw failure reason, if one is known."""
    for needle, hint in FAILURE_HINTS.items():
        if needle in reason:
            return hint
    return None


def print_listing(folder: str, entries: list[DirectoryEntry]):
    """Print a folder listing as a tree, folders marked with a trailing slash."""
    tree = Tree(f"[bold]{escape(folder)}[/bold]")
    for entry in entries:
        if entry.is_file:
            tree.add(escape(entry.name))
        else:
            tree.add(f"[blue]{escape(entry.name)}/[/blue]")
    console.print(tree)


def print_preview(folder: str, preview: Preview):
    """Print a summary table and the planned moves of a preview."""
    table = Table(title="Preview Summary")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", style="magenta")

    table.add_row("Files", str(preview.original_file_count))
    table.add_row("Folders", str(preview.original_folder_count))
    table.add_row("Files to move", str(preview.moved_count))
    table.add_row("Unmatched files", str(len(preview.unmatched_files)))
    table.add_row("New folders", str(len(preview.new_folders)))
    table.add_row("Existing folders receiving files", str(len(preview.changed_folders)))

    console.print(table)

    tree = Tree(f"[bold]{escape(folder)}[/bold]")
    for destination, names in preview.destinations.items():
        label = "new" if destination in preview.new_folders else "existing"
        branch = tree.add(f"[green]{escape(destination)}/[/green] [dim]({label})[/dim]")
        for name in names:
            branch.add(f"[yellow]{escape(name)}[/yellow]")
    for name in preview.unchanged_folders:
        tree.add(f"[dim]{escape(name)}/[/dim]")
    for name in preview.unmatched_files:
        tree.add(f"[dim]{escape(name)}[/dim]")
    console.print(tree)


def print_result(folder: str, result: ExecutionResult):
    """Print the before/after snapshots and any failures of a run."""
    before = Tree(f"[bold]Before[/bold] {escape(folder)}")
    for name in result.before_snapshot.get(folder, ()):
        before.add(escape(name))
    console.print(before)

    after = Tree(f"[bold]After[/bold] {escape(folder)}")
    for entry in result.after_snapshot.get(folder, ()):
        if isinstance(entry, TouchedFolder):
            branch = after.add(f"[green]{escape(entry.name)}/[/green]")
            for name in entry.moved_files:
                branch.add(f"[yellow]{escape(name)}[/yellow]")
        else:
            after.add(escape(entry.name))
    console.print(after)

    if result.errors:
        table = Table(title="Failures")
        table.add_column("File", style="cyan")
        table.add_column("Reason", style="red")
        table.add_column("Hint")
        for failure in result.errors:
            table.add_row(escape(failure.file_name), escape(failure.reason), describe_failure(failure.reason) or "")
        console.print(table)


def save_json(data: Any, path: Path) -> None:
    """
    Save data to a JSON file with pretty formatting.

    Args:
        data: The data to serialize.
        path: The output file path.
    """
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
    print(f"[INFO] Saved: {path}")

