"""Post-order pruning and depth limiting for working trees.

The root passed in is never removed by any helper here, even when it ends up
childless. Prune before sorting so decisions see the pre-sort child set.
"""

from __future__ import annotations

from collections.abc import Callable

from .types import NodeRecord, TempNode


def _post_order(root: TempNode) -> list[TempNode]:
    """Return nodes of ``root`` so that every child precedes its parent."""
    ordered: list[TempNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        ordered.append(node)
        stack.extend(node.children)
    ordered.reverse()
    return ordered


def prune_empty_directories(root: TempNode) -> int:
    """Remove directories left without children; return how many were removed.

    Works bottom-up, so a directory whose only children were emptied
    directories is removed as well. Files and symlinks always stay.
    """
    removed = 0
    for node in _post_order(root):
        kept: list[TempNode] = []
        for child in node.children:
            if child.is_dir and not child.children:
                removed += 1
                continue
            kept.append(child)
        node.children = kept
    return removed


def prune_tree(root: TempNode, keep: Callable[[NodeRecord], bool]) -> int:
    """Drop nodes failing ``keep`` unless a descendant survives; return removal count.

    Ancestors of surviving nodes are retained even when they fail the
    predicate themselves.
    """
    removed = 0
    for node in _post_order(root):
        kept: list[TempNode] = []
        for child in node.children:
            if child.children or (child.record is not None and keep(child.record)):
                kept.append(child)
            else:
                removed += 1
        node.children = kept
    return removed


def limit_depth(root: TempNode, max_depth: int) -> None:
    """Drop every node more than ``max_depth`` levels below ``root``.

    Children of a synthetic root count as level 0, matching flattened depths.
    """
    start_level = -1 if root.is_synthetic else 0
    frontier = [(root, start_level)]
    while frontier:
        node, level = frontier.pop()
        if level >= max_depth:
            node.children = []
            continue
        frontier.extend((child, level + 1) for child in node.children)


__all__ = [
    "prune_empty_directories",
    "prune_tree",
    "limit_depth",
]
