"""
Top-level folder listing.

Only the first level of a folder is ever read. Dot-prefixed entries
(.DS_Store, .git, ...) are dropped here and never reach the engine.
"""

import errno
import os
from pathlib import Path

from .contracts import DirectoryEntry, ReadFolderRequest, ReadFolderResponse

PERMISSION_DENIED_MESSAGE = "Permission denied. cluttercut cannot read this folder."


def is_hidden(name: str) -> bool:
    return name.startswith(".")


def list_entries(folder: str | Path) -> list[DirectoryEntry]:
    """
    List the visible top-level entries of a folder.

    Files come first, then directories, each group sorted by name, so two
    listings of the same folder always come back in the same order.

    Args:
        folder: Folder to list.

    Returns:
        DirectoryEntry records. Symlinks are never reported as files, whatever
        they point at, so the engine never moves them.

    Raises:
        OSError: If the folder cannot be read.
    """
    entries = []
    with os.scandir(folder) as it:
        for entry in it:
            if is_hidden(entry.name):
                continue
            entries.append(DirectoryEntry(name=entry.name, is_file=entry.is_file(follow_symlinks=False)))
    entries.sort(key=lambda e: (not e.is_file, e.name))
    return entries


def read_folder(req: ReadFolderRequest) -> ReadFolderResponse:
    """
    Read a folder for display purposes. Never raises.

    Permission problems get a human-readable message; anything else is
    reported with the underlying error text.
    """
    try:
        files = list_entries(req.folder_path)
    except PermissionError:
        return ReadFolderResponse(error=PERMISSION_DENIED_MESSAGE)
    except OSError as e:
        if e.errno in (errno.EACCES, errno.EPERM):
            return ReadFolderResponse(error=PERMISSION_DENIED_MESSAGE)
        return ReadFolderResponse(error=f"Failed to read folder: {e}")
    return ReadFolderResponse(files=tuple(files))
