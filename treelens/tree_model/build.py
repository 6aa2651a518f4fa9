"""Conversion between flat depth-first record sequences and working trees."""

from __future__ import annotations

from collections.abc import Iterable

from ..errors import DuplicatePathError, TreeBuildError
from .types import NodeRecord, TempNode, path_depth


def ensure_unique_paths(records: Iterable[NodeRecord]) -> None:
    """Raise ``DuplicatePathError`` for the first path seen twice."""
    seen: set[str] = set()
    for record in records:
        if record.path in seen:
            raise DuplicatePathError(record.path)
        seen.add(record.path)


def build_tree(records: Iterable[NodeRecord], *, require_root: bool = True) -> TempNode:
    """Build a working tree from records in sibling-contiguous pre-order.

    Each record's parent is the nearest preceding open directory one level
    shallower, and its path must extend that parent's path by one segment.
    Returns the lone depth-0 node, or a synthetic root (``record`` is
    ``None``) when there are several depth-0 records. With
    ``require_root=False`` an empty input yields an empty synthetic root.
    """
    materialized = list(records)
    if not materialized:
        if require_root:
            raise TreeBuildError("cannot build a tree from an empty record sequence")
        return TempNode(None)

    ensure_unique_paths(materialized)
    first = materialized[0]
    if first.depth != 0:
        raise TreeBuildError(f"first record {first.path!r} has depth {first.depth}, expected 0")

    top_level: list[TempNode] = []
    # Open directories along the current branch, shallowest first.
    open_dirs: list[TempNode] = []
    for record in materialized:
        if record.depth < 0:
            raise TreeBuildError(f"record {record.path!r} has negative depth {record.depth}")
        if record.depth != path_depth(record.path):
            raise TreeBuildError(
                f"record {record.path!r} has depth {record.depth}, but its path implies {path_depth(record.path)}"
            )
        while open_dirs and open_dirs[-1].record.depth >= record.depth:
            open_dirs.pop()

        node = TempNode(record)
        if record.depth == 0:
            top_level.append(node)
        else:
            parent_depth = open_dirs[-1].record.depth if open_dirs else -1
            if parent_depth != record.depth - 1:
                raise TreeBuildError(
                    f"record {record.path!r} at depth {record.depth} has no open parent directory "
                    f"at depth {record.depth - 1} (nearest open depth: {parent_depth})"
                )
            parent = open_dirs[-1]
            if not record.path.startswith(f"{parent.record.path}/"):
                raise TreeBuildError(
                    f"record {record.path!r} does not belong under directory {parent.record.path!r}"
                )
            parent.children.append(node)

        if record.is_dir:
            open_dirs.append(node)

    if len(top_level) == 1:
        return top_level[0]
    return TempNode(None, top_level)


def flatten_tree(root: TempNode) -> list[NodeRecord]:
    """Flatten a working tree back to pre-order records.

    Depths are recomputed from tree position, so a directory's subtree is
    contiguous and every parent directly precedes its first child. The
    synthetic root emits nothing; its children sit at depth 0.
    """
    result: list[NodeRecord] = []
    if root.record is None:
        stack = [(child, 0) for child in reversed(root.children)]
    else:
        stack = [(root, 0)]

    while stack:
        node, depth = stack.pop()
        if node.record is None:
            raise TreeBuildError("synthetic root found below the top of the tree")
        result.append(node.record.at_depth(depth))
        for child in reversed(node.children):
            stack.append((child, depth + 1))
    return result


__all__ = [
    "ensure_unique_paths",
    "build_tree",
    "flatten_tree",
]
