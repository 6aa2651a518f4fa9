"""Change-set datatypes produced by snapshot diffing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..errors import ConfigError
from ..tree_model.types import NodeKind, NodeRecord


class ChangeKind(str, Enum):
    """Classification of one path between two snapshots."""

    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"
    MOVED = "moved"
    TYPE_CHANGED = "type_changed"
    UNCHANGED = "unchanged"

    @classmethod
    def from_string(cls, value: str) -> ChangeKind:
        """Parse a user-facing change name or shorthand such as ``mv`` or ``+``."""
        normalized = value.strip().lower()
        for kind, aliases in _CHANGE_KIND_ALIASES.items():
            if normalized in aliases:
                return kind
        valid = ", ".join(kind.value for kind in cls)
        raise ConfigError(f"invalid change type {value!r} (expected one of: {valid})")


_CHANGE_KIND_ALIASES: dict[ChangeKind, frozenset[str]] = {
    ChangeKind.ADDED: frozenset({"added", "add", "+"}),
    ChangeKind.REMOVED: frozenset({"removed", "remove", "rm", "-"}),
    ChangeKind.MODIFIED: frozenset({"modified", "modify", "mod", "m"}),
    ChangeKind.MOVED: frozenset({"moved", "move", "mv", "~"}),
    ChangeKind.TYPE_CHANGED: frozenset({"type_changed", "type-changed", "typechanged", "t"}),
    ChangeKind.UNCHANGED: frozenset({"unchanged", "same"}),
}


@dataclass(frozen=True)
class ChangeRecord:
    """One classified path: ``old`` from the before-snapshot, ``new`` from after.

    ``old`` is absent only for ADDED and ``new`` only for REMOVED.
    ``similarity_score`` is set only for MOVED.
    """

    old: NodeRecord | None
    new: NodeRecord | None
    change_kind: ChangeKind
    similarity_score: float | None = None

    def __post_init__(self) -> None:
        if self.change_kind is ChangeKind.ADDED:
            valid_sides = self.old is None and self.new is not None
        elif self.change_kind is ChangeKind.REMOVED:
            valid_sides = self.old is not None and self.new is None
        else:
            valid_sides = self.old is not None and self.new is not None
        if not valid_sides:
            raise ValueError(f"{self.change_kind.value} change has invalid old/new records")
        if (self.similarity_score is not None) != (self.change_kind is ChangeKind.MOVED):
            raise ValueError("similarity_score is required for moves and only for moves")

    def current(self) -> NodeRecord:
        """New record when present, otherwise the old one."""
        if self.new is not None:
            return self.new
        if self.old is not None:
            return self.old
        raise ValueError(f"{self.change_kind.value} change has no records")

    @property
    def path(self) -> str:
        return self.current().path

    @property
    def kind(self) -> NodeKind:
        return self.current().kind

    @property
    def is_directory(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    @property
    def size_delta(self) -> int:
        new_size = self.new.size if self.new is not None and self.new.size is not None else 0
        old_size = self.old.size if self.old is not None and self.old.size is not None else 0
        return new_size - old_size


@dataclass
class DiffSummary:
    """Aggregate counts over every classified path, shown or not."""

    added: int = 0
    removed: int = 0
    modified: int = 0
    moved: int = 0
    type_changed: int = 0
    unchanged: int = 0
    files_added: int = 0
    directories_added: int = 0
    files_removed: int = 0
    directories_removed: int = 0
    files_moved: int = 0
    directories_moved: int = 0
    size_change: int = 0

    def record(self, change: ChangeRecord) -> None:
        kind = change.change_kind
        setattr(self, kind.value, getattr(self, kind.value) + 1)
        if kind in (ChangeKind.ADDED, ChangeKind.REMOVED, ChangeKind.MOVED):
            bucket = f"{'directories' if change.is_directory else 'files'}_{kind.value}"
            setattr(self, bucket, getattr(self, bucket) + 1)
        if kind is not ChangeKind.UNCHANGED:
            self.size_change += change.size_delta

    def count(self, kind: ChangeKind) -> int:
        return int(getattr(self, kind.value))

    @property
    def total_changes(self) -> int:
        return self.added + self.removed + self.modified + self.moved + self.type_changed


@dataclass(frozen=True)
class ChangeSet:
    """Visible changes (sorted by path) plus counts over all changes."""

    changes: tuple[ChangeRecord, ...] = ()
    summary: DiffSummary = field(default_factory=DiffSummary)

    def of_kind(self, kind: ChangeKind) -> list[ChangeRecord]:
        return [change for change in self.changes if change.change_kind is kind]

    @property
    def has_changes(self) -> bool:
        return self.summary.total_changes > 0


__all__ = [
    "ChangeKind",
    "ChangeRecord",
    "DiffSummary",
    "ChangeSet",
]
