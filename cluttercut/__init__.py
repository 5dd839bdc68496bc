"""
cluttercut
==========

Rule-based reorganizer for the top level of a folder. Files are matched
against an ordered rule list and moved into destination subfolders, with
name conflicts resolved by numbering and nothing ever deleted.
"""

__version__ = "1.0.0"

from .contracts import (
    ConditionType,
    Rule,
    DirectoryEntry,
    MoveSuccess,
    MoveFailure,
    PlainEntry,
    TouchedFolder,
    ExecuteRequest,
    ExecutionResult,
    ReadFolderRequest,
    ReadFolderResponse,
)
from .engine import execute, resolve_conflict
from .errors import CluttercutError, InvalidRequestError, RuleFileError
from .handlers import dispatch, handle_execute, handle_read_folder
from .preview import Preview, build_preview
from .rules import match, match_index, load_rules
from .scanner import list_entries, read_folder

__all__ = [
    "ConditionType",
    "Rule",
    "DirectoryEntry",
    "MoveSuccess",
    "MoveFailure",
    "PlainEntry",
    "TouchedFolder",
    "ExecuteRequest",
    "ExecutionResult",
    "ReadFolderRequest",
    "ReadFolderResponse",
    "execute",
    "resolve_conflict",
    "CluttercutError",
    "InvalidRequestError",
    "RuleFileError",
    "dispatch",
    "handle_execute",
    "handle_read_folder",
    "Preview",
    "build_preview",
    "match",
    "match_index",
    "load_rules",
    "list_entries",
    "read_folder",
]
