"""Node record and working-tree datatypes shared by builders, sorters, and differs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class NodeKind(str, Enum):
    """Filesystem entry kind."""

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"


@dataclass(frozen=True)
class NodeRecord:
    """Immutable metadata for one filesystem entry at one point in time.

    ``path`` is slash-separated and relative to the scan root; ``depth`` is the
    number of separators in it. Only ``path``/``kind``/``depth`` are required.
    ``content_fingerprint`` is an opaque comparable value (usually a hash)
    supplied by whoever produced the record.
    """

    path: str
    kind: NodeKind
    depth: int
    size: int | None = None
    modified_time: float | None = None
    content_fingerprint: str | None = None
    change_time: float | None = None
    create_time: float | None = None
    line_count: int | None = None
    word_count: int | None = None
    custom_score: float | str | None = None

    @property
    def name(self) -> str:
        """Final path segment."""
        return self.path.rsplit("/", 1)[-1]

    @property
    def is_dir(self) -> bool:
        return self.kind is NodeKind.DIRECTORY

    def at_depth(self, depth: int) -> NodeRecord:
        """Return this record with ``depth`` replaced (or ``self`` when unchanged)."""
        if depth == self.depth:
            return self
        return replace(self, depth=depth)


def path_depth(path: str) -> int:
    """Depth implied by a slash-separated relative path."""
    return path.count("/")


@dataclass(eq=False)
class TempNode:
    """Mutable hierarchy wrapper used for one build/prune/sort/flatten run.

    ``record`` is ``None`` only for the synthetic root that groups several
    depth-0 records.
    """

    record: NodeRecord | None
    children: list["TempNode"] = field(default_factory=list)

    @property
    def is_synthetic(self) -> bool:
        return self.record is None

    @property
    def is_dir(self) -> bool:
        # The synthetic root behaves like a directory holding the top level.
        return self.record is None or self.record.is_dir

    @property
    def name(self) -> str:
        return "" if self.record is None else self.record.name


__all__ = [
    "NodeKind",
    "NodeRecord",
    "TempNode",
    "path_depth",
]
