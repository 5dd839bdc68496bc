"""
Reorganization engine for cluttercut.

Moves the matched top-level files of a folder into destination subfolders and
reports what happened. The only filesystem primitives used are directory
creation, existence checks and ``os.rename``; nothing is ever deleted.
"""

import itertools
import os
import threading
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from tqdm import tqdm

from .contracts import (
    ExecuteRequest,
    ExecutionResult,
    MoveFailure,
    MoveOutcome,
    MoveSuccess,
    PlainEntry,
    SYSTEM_ERROR,
    SnapshotEntry,
    TouchedFolder,
)
from .rules import match
from .scanner import list_entries


class _DestinationLocks:
    """One lock per destination folder, created on first use."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def get(self, destination: str) -> threading.Lock:
        with self._guard:
            if destination not in self._locks:
                self._locks[destination] = threading.Lock()
            return self._locks[destination]


def resolve_conflict(dest_dir: str | Path, file_name: str) -> str:
    """
    Pick a name for ``file_name`` that is free inside ``dest_dir``.

    Tries the original name first, then ``base_1.ext``, ``base_2.ext``, ...
    The loop has no upper bound but always terminates: every candidate is
    distinct and the directory holds finitely many entries, so some counter
    is free.
    """
    dest_dir = Path(dest_dir)
    if not os.path.lexists(dest_dir / file_name):
        return file_name

    base, ext = os.path.splitext(file_name)
    for counter in itertools.count(1):
        candidate = f"{base}_{counter}{ext}"
        if not os.path.lexists(dest_dir / candidate):
            return candidate


def _move_file(root: str, file_name: str, destination: str, lock: threading.Lock) -> MoveOutcome:
    """Move one file into ``root/destination``, safe for threads."""
    source = Path(root) / file_name
    dest_dir = Path(root) / destination
    try:
        os.makedirs(str(dest_dir), exist_ok=True)
        # Name lookup and rename happen under the destination lock so two
        # files headed for the same folder never pick the same free name.
        with lock:
            final_name = resolve_conflict(dest_dir, file_name)
            os.rename(str(source), str(dest_dir / final_name))
    except Exception as e:
        return MoveFailure(file_name=file_name, reason=str(e))
    return MoveSuccess(original_name=file_name, final_name=final_name, destination_folder=destination)


def _run_moves(
    root: str,
    planned: list[tuple[str, str]],
    max_workers: int,
    show_progress: bool
) -> list[MoveOutcome]:
    """Perform the planned moves and return outcomes in plan order."""
    locks = _DestinationLocks()
    outcomes: list[MoveOutcome] = []

    with tqdm(total=len(planned), unit="file", disable=not show_progress) as pbar:
        if max_workers <= 1:
            for file_name, destination in planned:
                outcomes.append(_move_file(root, file_name, destination, locks.get(destination)))
                pbar.update(1)
        else:
            with ThreadPoolExecutor(max_workers=max_workers) as executor:
                futures = [
                    executor.submit(_move_file, root, file_name, destination, locks.get(destination))
                    for file_name, destination in planned
                ]
                for future in futures:
                    outcomes.append(future.result())
                    pbar.update(1)

    return outcomes


def _build_after_snapshot(root: str, touched: dict[str, list[str]]) -> list[SnapshotEntry]:
    after: list[SnapshotEntry] = []
    for entry in list_entries(root):
        if not entry.is_file and entry.name in touched:
            after.append(TouchedFolder(entry.name, tuple(touched[entry.name])))
        else:
            after.append(PlainEntry(entry.name))
    return after


def execute(
    request: ExecuteRequest,
    max_workers: int = 1,
    show_progress: bool = False
) -> ExecutionResult:
    """
    Apply the request's rules to the top level of its folder.

    Never raises: a failed initial scan becomes a single "System Error"
    entry, and each failed move is recorded and skipped.

    Args:
        request: Folder path plus ordered rules.
        max_workers: Number of move threads. 1 (the default) moves files
            sequentially in scan order.
        show_progress: Show a progress bar and summary lines.

    Returns:
        ExecutionResult with counts, per-file errors and before/after snapshots.
    """
    root = request.folder_path

    try:
        entries = list_entries(root)
    except Exception as e:
        tqdm.write(f"[ERROR] Cannot read folder: {root} ({e})")
        return ExecutionResult.system_error(str(e))

    before = tuple(entry.name for entry in entries)

    planned: list[tuple[str, str]] = []
    file_count = 0
    for entry in entries:
        if not entry.is_file:
            continue
        file_count += 1
        rule = match(entry.name, request.rules)
        if rule is not None:
            planned.append((entry.name, rule.destination_folder.strip()))

    if show_progress:
        print(f"[EXECUTE] {len(planned)} of {file_count} files matched a rule")

    moved_count = 0
    errors: list[MoveFailure] = []
    touched: dict[str, list[str]] = defaultdict(list)

    for outcome in _run_moves(root, planned, max_workers, show_progress):
        if isinstance(outcome, MoveSuccess):
            moved_count += 1
            touched[outcome.destination_folder].append(outcome.final_name)
        else:
            errors.append(outcome)
            tqdm.write(f"[ERROR] {outcome.reason}: {outcome.file_name}")

    failed_count = len(errors)

    # The after-snapshot comes from a fresh listing, so changes made by other
    # processes during the run show up in it.
    after_snapshot = {}
    try:
        after_snapshot[root] = tuple(_build_after_snapshot(root, touched))
    except Exception as e:
        tqdm.write(f"[ERROR] Cannot re-read folder: {root} ({e})")
        errors.append(MoveFailure(file_name=SYSTEM_ERROR, reason=str(e)))

    if show_progress:
        print(f"[EXECUTE] Complete: {moved_count} moved, {failed_count} failed")

    return ExecutionResult(
        success=not errors,
        moved_count=moved_count,
        failed_count=failed_count,
        errors=tuple(errors),
        before_snapshot={root: before},
        after_snapshot=after_snapshot,
    )
