"""Sibling sorting for working trees.

Children are reordered per level only, so sorting never moves a node across
levels. A non-default directory-order policy partitions siblings before the
key comparator runs, and that partition is never reversed.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key

from ..errors import ConfigError
from .build import build_tree, flatten_tree
from .types import NodeRecord, TempNode


class SortKey(str, Enum):
    """Attribute used to order siblings."""

    NAME = "name"
    SIZE = "size"
    MODIFIED_TIME = "mtime"
    CHANGE_TIME = "ctime"
    CREATE_TIME = "crtime"
    VERSION = "version"
    LINE_COUNT = "lines"
    WORD_COUNT = "words"
    CUSTOM = "custom"
    NONE = "none"

    @classmethod
    def from_string(cls, value: str) -> SortKey:
        """Parse a user-facing key name, accepting a few long-form aliases."""
        normalized = value.strip().lower().replace("_", "-")
        aliases = {
            "modified": cls.MODIFIED_TIME,
            "modified-time": cls.MODIFIED_TIME,
            "change-time": cls.CHANGE_TIME,
            "create-time": cls.CREATE_TIME,
            "line-count": cls.LINE_COUNT,
            "word-count": cls.WORD_COUNT,
            "unsorted": cls.NONE,
        }
        if normalized in aliases:
            return aliases[normalized]
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ConfigError(f"unknown sort key {value!r} (expected one of: {valid})") from None


class DirectoryOrder(str, Enum):
    """Whether directories are grouped ahead of, after, or among other siblings."""

    DEFAULT = "default"
    DIRECTORIES_FIRST = "dirs-first"
    FILES_FIRST = "files-first"

    @classmethod
    def from_string(cls, value: str) -> DirectoryOrder:
        normalized = value.strip().lower().replace("_", "-")
        if normalized in ("directories-first", "dirsfirst"):
            return cls.DIRECTORIES_FIRST
        if normalized == "filesfirst":
            return cls.FILES_FIRST
        try:
            return cls(normalized)
        except ValueError:
            valid = ", ".join(member.value for member in cls)
            raise ConfigError(f"unknown directory order {value!r} (expected one of: {valid})") from None


@dataclass(frozen=True)
class SortOptions:
    key: SortKey = SortKey.NAME
    directory_order: DirectoryOrder = DirectoryOrder.DEFAULT
    reverse: bool = False


RecordComparator = Callable[[NodeRecord, NodeRecord], int]

_DIGIT_RUN = re.compile(r"(\d+)")


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)


def _compare_optional(a: object | None, b: object | None) -> int:
    """Compare optional values with missing values after present ones."""
    if a is None and b is None:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    return _cmp(a, b)


def compare_names(a: NodeRecord, b: NodeRecord) -> int:
    """Code-point comparison of final path segments (UTF-8 byte order)."""
    return _cmp(a.name, b.name)


def compare_version_strings(a: str, b: str) -> int:
    """Compare names run-by-run, numeric runs by integer value.

    ``re.split`` with a capturing group yields text runs at even indexes and
    digit runs at odd indexes, so runs of the same type always line up.
    """
    a_runs = _DIGIT_RUN.split(a)
    b_runs = _DIGIT_RUN.split(b)
    for index, (a_run, b_run) in enumerate(zip(a_runs, b_runs)):
        if index % 2:
            result = _cmp(int(a_run), int(b_run))
        else:
            result = _cmp(a_run, b_run)
        if result:
            return result
    return _cmp(len(a_runs), len(b_runs))


def _compare_custom(a: NodeRecord, b: NodeRecord) -> int:
    left, right = a.custom_score, b.custom_score
    if left is None or right is None:
        return _compare_optional(left, right)
    if isinstance(left, str) != isinstance(right, str):
        return _cmp(str(left), str(right))
    return _cmp(left, right)


_KEY_COMPARATORS: dict[SortKey, RecordComparator] = {
    SortKey.NAME: compare_names,
    SortKey.SIZE: lambda a, b: _compare_optional(a.size, b.size),
    SortKey.MODIFIED_TIME: lambda a, b: _compare_optional(a.modified_time, b.modified_time),
    SortKey.CHANGE_TIME: lambda a, b: _compare_optional(a.change_time, b.change_time),
    SortKey.CREATE_TIME: lambda a, b: _compare_optional(a.create_time, b.create_time),
    SortKey.VERSION: lambda a, b: compare_version_strings(a.name, b.name),
    SortKey.LINE_COUNT: lambda a, b: _compare_optional(a.line_count, b.line_count),
    SortKey.WORD_COUNT: lambda a, b: _compare_optional(a.word_count, b.word_count),
    SortKey.CUSTOM: _compare_custom,
}


def record_comparator(key: SortKey, reverse: bool = False) -> RecordComparator:
    """Return the full comparator for ``key``: key, then name, then reverse."""
    if key is SortKey.NONE:
        raise ConfigError("SortKey.NONE has no comparator; it preserves traversal order")
    key_compare = _KEY_COMPARATORS[key]

    def compare(a: NodeRecord, b: NodeRecord) -> int:
        result = key_compare(a, b) or compare_names(a, b)
        return -result if reverse else result

    return compare


def _partition(children: list[TempNode], order: DirectoryOrder) -> list[list[TempNode]]:
    if order is DirectoryOrder.DEFAULT:
        return [list(children)]
    directories = [child for child in children if child.is_dir]
    others = [child for child in children if not child.is_dir]
    if order is DirectoryOrder.DIRECTORIES_FIRST:
        return [directories, others]
    return [others, directories]


def sort_siblings(children: list[TempNode], options: SortOptions) -> None:
    """Reorder one sibling list in place."""
    groups = _partition(children, options.directory_order)
    if options.key is not SortKey.NONE:
        compare = record_comparator(options.key, options.reverse)
        sort_key = cmp_to_key(lambda a, b: compare(a.record, b.record))
        for group in groups:
            group.sort(key=sort_key)
    children[:] = [node for group in groups for node in group]


def sort_tree(root: TempNode, options: SortOptions) -> None:
    """Sort children at every level of ``root`` in place."""
    if options.key is SortKey.NONE and options.directory_order is DirectoryOrder.DEFAULT:
        return
    pending = [root]
    while pending:
        node = pending.pop()
        if node.children:
            sort_siblings(node.children, options)
            pending.extend(node.children)


def sort_records(records: Iterable[NodeRecord], options: SortOptions) -> list[NodeRecord]:
    """Sort a flat pre-order record sequence while preserving its hierarchy."""
    materialized = list(records)
    if not materialized:
        return []
    root = build_tree(materialized)
    sort_tree(root, options)
    return flatten_tree(root)


__all__ = [
    "SortKey",
    "DirectoryOrder",
    "SortOptions",
    "compare_names",
    "compare_version_strings",
    "record_comparator",
    "sort_siblings",
    "sort_tree",
    "sort_records",
]
