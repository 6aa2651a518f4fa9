"""Visitor-driven traversals over working trees.

Directories trigger ``enter_directory``/``exit_directory`` instead of
``visit``; returning ``False`` from ``enter_directory`` skips that subtree.
All traversals are iterative. Depths count children of a synthetic root as 0.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator
from enum import Enum

from ..errors import TreeBuildError
from .types import NodeRecord, TempNode


class TraversalOrder(str, Enum):
    PRE_ORDER = "pre-order"
    POST_ORDER = "post-order"
    BREADTH_FIRST = "breadth-first"


class TreeVisitor:
    """Base visitor; override the hooks you need."""

    def visit(self, record: NodeRecord, depth: int) -> bool:
        return True

    def enter_directory(self, record: NodeRecord, depth: int) -> bool:
        return self.visit(record, depth)

    def exit_directory(self, record: NodeRecord, depth: int) -> None:
        return None


def _node_record(node: TempNode) -> NodeRecord:
    if node.record is None:
        raise TreeBuildError("synthetic root found below the top of the tree")
    return node.record


def _top_level(root: TempNode) -> list[tuple[TempNode, int]]:
    if root.is_synthetic:
        return [(child, 0) for child in root.children]
    return [(root, 0)]


def walk_depth_first(root: TempNode, visitor: TreeVisitor) -> None:
    """Enter directories before their children and exit them after the subtree.

    Pre-order and post-order differ only in which hook a caller acts on:
    ``enter_directory`` sees parents first, ``exit_directory`` sees them last.
    """
    # Entries are (node, depth, exiting); exiting markers replay exit hooks.
    stack: list[tuple[TempNode, int, bool]] = [
        (node, depth, False) for node, depth in reversed(_top_level(root))
    ]
    while stack:
        node, depth, exiting = stack.pop()
        record = _node_record(node)
        if exiting:
            visitor.exit_directory(record, depth)
            continue
        if not record.is_dir:
            visitor.visit(record, depth)
            continue
        descend = visitor.enter_directory(record, depth)
        stack.append((node, depth, True))
        if descend:
            stack.extend((child, depth + 1, False) for child in reversed(node.children))


def walk_breadth_first(root: TempNode, visitor: TreeVisitor) -> None:
    """Visit level by level; exit hooks run at the end, deepest level first."""
    queue = deque(_top_level(root))
    exits: list[tuple[NodeRecord, int]] = []
    while queue:
        node, depth = queue.popleft()
        record = _node_record(node)
        if record.is_dir:
            descend = visitor.enter_directory(record, depth)
            exits.append((record, depth))
        else:
            descend = visitor.visit(record, depth)
        if descend:
            queue.extend((child, depth + 1) for child in node.children)

    # Stable sort keeps FIFO order within each depth.
    for record, depth in sorted(exits, key=lambda item: -item[1]):
        visitor.exit_directory(record, depth)


class _Collector(TreeVisitor):
    def __init__(self, collect_on_exit: bool) -> None:
        self.records: list[NodeRecord] = []
        self._collect_on_exit = collect_on_exit

    def visit(self, record: NodeRecord, depth: int) -> bool:
        self.records.append(record)
        return True

    def enter_directory(self, record: NodeRecord, depth: int) -> bool:
        if not self._collect_on_exit:
            self.records.append(record)
        return True

    def exit_directory(self, record: NodeRecord, depth: int) -> None:
        if self._collect_on_exit:
            self.records.append(record)


_WALKERS: dict[TraversalOrder, Callable[[TempNode, TreeVisitor], None]] = {
    TraversalOrder.PRE_ORDER: walk_depth_first,
    TraversalOrder.POST_ORDER: walk_depth_first,
    TraversalOrder.BREADTH_FIRST: walk_breadth_first,
}


def collect_records(root: TempNode, order: TraversalOrder = TraversalOrder.PRE_ORDER) -> list[NodeRecord]:
    """Return every record under ``root`` in traversal ``order``."""
    collector = _Collector(collect_on_exit=order is TraversalOrder.POST_ORDER)
    _WALKERS[order](root, collector)
    return collector.records


def iter_nodes(root: TempNode) -> Iterator[tuple[TempNode, int]]:
    """Yield ``(node, depth)`` pairs in pre-order, skipping a synthetic root."""
    stack = list(reversed(_top_level(root)))
    while stack:
        node, depth = stack.pop()
        yield node, depth
        stack.extend((child, depth + 1) for child in reversed(node.children))


def find_record(root: TempNode, predicate: Callable[[NodeRecord], bool]) -> NodeRecord | None:
    """Return the first pre-order record matching ``predicate``."""
    for node, _depth in iter_nodes(root):
        record = _node_record(node)
        if predicate(record):
            return record
    return None


__all__ = [
    "TraversalOrder",
    "TreeVisitor",
    "walk_depth_first",
    "walk_breadth_first",
    "collect_records",
    "iter_nodes",
    "find_record",
]
