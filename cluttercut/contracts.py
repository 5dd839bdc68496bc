"""
Request/response types shared by the engine, the preview and the handlers.

Snapshot entries are modelled as a tagged variant (PlainEntry | TouchedFolder)
and only flattened to the loose ``str | {name: [files]}`` shape by ``to_dict()``.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union

from .errors import InvalidRequestError

SYSTEM_ERROR = "System Error"


class ConditionType(str, Enum):
    EXTENSION = "extension"
    NAME_CONTAINS = "name_contains"

    @classmethod
    def parse(cls, value: Any) -> "ConditionType":
        """Accept the canonical names plus the ``file_extension`` alias."""
        if isinstance(value, ConditionType):
            return value
        if value == "file_extension":
            return cls.EXTENSION
        try:
            return cls(value)
        except ValueError:
            raise InvalidRequestError(f"Unknown condition type: {value!r}")


@dataclass(frozen=True)
class Rule:
    """
    A single condition -> destination folder mapping.

    Rules are evaluated in list order; the first one that matches a file wins.
    ``destination_folder`` is a bare folder name directly under the root.
    """
    condition_type: ConditionType
    condition_value: str
    destination_folder: str

    @classmethod
    def from_dict(cls, data: Any) -> "Rule":
        """
        Build a Rule from a wire-shaped dict.

        Raises:
                or the destination is not a bare, visible folder name.
                or the destination is not a bare folder name.
        """
        if not isinstance(data, dict):
            raise InvalidRequestError("Rule must be an object")

        value = data.get("conditionValue")
        destination = data.get("destinationFolder")
        if not isinstance(value, str):
            raise InvalidRequestError("Rule conditionValue must be a string")
        if not isinstance(destination, str):
            raise InvalidRequestError("Rule destinationFolder must be a string")

        destination = destination.strip()
        if "/" in destination or "\\" in destination or destination.startswith("."):
            raise InvalidRequestError(
                f"destinationFolder must be a bare folder name: {destination!r}"
            )

        return cls(
            condition_type=ConditionType.parse(data.get("conditionType")),
            condition_value=value,
            destination_folder=destination,
        )

    def to_dict(self) -> dict:
        return {
            "conditionType": self.condition_type.value,
            "conditionValue": self.condition_value,
            "destinationFolder": self.destination_folder,
        }


@dataclass(frozen=True)
class DirectoryEntry:
    name: str
    is_file: bool

    def to_dict(self) -> dict:
        return {"name": self.name, "isFile": self.is_file}


@dataclass(frozen=True)
class MoveSuccess:
    original_name: str
    final_name: str
    destination_folder: str


@dataclass(frozen=True)
class MoveFailure:
    file_name: str
    reason: str

    def to_dict(self) -> dict:
        return {"fileName": self.file_name, "reason": self.reason}


MoveOutcome = Union[MoveSuccess, MoveFailure]


@dataclass(frozen=True)
class PlainEntry:
    """An untouched file or subdirectory in a snapshot."""
    name: str

    def to_wire(self) -> str:
        return self.name


@dataclass(frozen=True)
class TouchedFolder:
    """A destination folder that received files during this run."""
    name: str
    moved_files: tuple[str, ...] = ()

    def to_wire(self) -> dict:
        return {self.name: list(self.moved_files)}


SnapshotEntry = Union[PlainEntry, TouchedFolder]


@dataclass(frozen=True)
class ExecuteRequest:
    folder_path: str
    rules: tuple[Rule, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "ExecuteRequest":
        """
        Validate a loose ``{folderPath, rules}`` payload once, at the boundary.

        Raises:
            InvalidRequestError: If the payload does not have the expected shape.
        """
        if not isinstance(data, dict):
            raise InvalidRequestError("Request must be an object")

        folder_path = data.get("folderPath")
        rules = data.get("rules")
        if not isinstance(folder_path, str):
            raise InvalidRequestError("folderPath must be a string")
        if not isinstance(rules, list):
            raise InvalidRequestError("rules must be a list")

        return cls(folder_path=folder_path, rules=tuple(Rule.from_dict(r) for r in rules))


@dataclass(frozen=True)
class ExecutionResult:
    """
    Aggregate outcome of one engine run.

    ``success`` is True iff there were zero failures. A result with both
    ``moved_count > 0`` and ``failed_count > 0`` is a partial success.
    """
    success: bool
    moved_count: int
    failed_count: int
    errors: tuple[MoveFailure, ...] = ()
    before_snapshot: dict[str, tuple[str, ...]] = field(default_factory=dict)
    after_snapshot: dict[str, tuple[SnapshotEntry, ...]] = field(default_factory=dict)

    @classmethod
    def system_error(cls, reason: str) -> "ExecutionResult":
        return cls(
            success=False,
            moved_count=0,
            failed_count=0,
            errors=(MoveFailure(SYSTEM_ERROR, reason),),
        )

    @property
    def is_partial(self) -> bool:
        return self.moved_count > 0 and self.failed_count > 0

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "movedCount": self.moved_count,
            "failedCount": self.failed_count,
            "errors": [e.to_dict() for e in self.errors],
            "beforeSnapshot": {root: list(names) for root, names in self.before_snapshot.items()},
            "afterSnapshot": {
                root: [entry.to_wire() for entry in entries]
                for root, entries in self.after_snapshot.items()
            },
        }


@dataclass(frozen=True)
class ReadFolderRequest:
    folder_path: str


@dataclass(frozen=True)
class ReadFolderResponse:
    files: tuple[DirectoryEntry, ...] = ()
    error: str | None = None

    def to_dict(self) -> dict:
        return {"files": [f.to_dict() for f in self.files], "error": self.error}
