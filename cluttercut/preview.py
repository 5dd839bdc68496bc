"""
Read-only preview of what a run would do.

Works purely on a folder listing and a rule list; the filesystem is never
touched. Uses the engine's matcher, so the plan shown here is the plan the
engine will follow (minus conflict renaming, which depends on disk state).
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .contracts import DirectoryEntry, Rule
from .rules import match_index


@dataclass
class PlannedMove:
    file_name: str
    rule_index: int
    destination: str


@dataclass
class Preview:
    """
    Planned outcome of applying rules to a listing.

    ``destinations`` maps each destination folder to the files headed there,
    in listing order. Folder lists are sorted by name.
    """
    moves: list[PlannedMove] = field(default_factory=list)
    destinations: dict[str, list[str]] = field(default_factory=dict)
    unmatched_files: list[str] = field(default_factory=list)
    new_folders: list[str] = field(default_factory=list)
    changed_folders: list[str] = field(default_factory=list)
    unchanged_folders: list[str] = field(default_factory=list)
    original_file_count: int = 0
    original_folder_count: int = 0

    @property
    def moved_count(self) -> int:
        return len(self.moves)


def build_preview(entries: Iterable[DirectoryEntry], rules: Sequence[Rule]) -> Preview:
    """
    Compute the move plan for a listing without touching the disk.

    Args:
        entries: Top-level listing, as returned by ``list_entries``.
        rules: Ordered rules.

    Returns:
        Preview grouping matched files by destination and classifying the
        existing folders as changed or unchanged.
    """
    entries = list(entries)
    preview = Preview()
    existing_dirs = {e.name for e in entries if not e.is_file}

    for entry in entries:
        if not entry.is_file:
            preview.original_folder_count += 1
            continue
        preview.original_file_count += 1

        index = match_index(entry.name, rules)
        if index is None:
            preview.unmatched_files.append(entry.name)
            continue

        destination = rules[index].destination_folder.strip()
        preview.moves.append(PlannedMove(entry.name, index, destination))
        preview.destinations.setdefault(destination, []).append(entry.name)

    preview.new_folders = sorted(d for d in preview.destinations if d not in existing_dirs)
    preview.changed_folders = sorted(d for d in preview.destinations if d in existing_dirs)
    preview.unchanged_folders = sorted(d for d in existing_dirs if d not in preview.destinations)
    return preview
