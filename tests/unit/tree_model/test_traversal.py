"""Tests for visitor traversals over working trees."""

from __future__ import annotations

import unittest

from treelens.errors import TreeBuildError
from treelens.tree_model import (
    NodeKind,
    NodeRecord,
    TempNode,
    TraversalOrder,
    TreeVisitor,
    build_tree,
    collect_records,
    find_record,
    iter_nodes,
    walk_breadth_first,
    walk_depth_first,
)

D = NodeKind.DIRECTORY


def _rec(path: str, kind: NodeKind = NodeKind.FILE) -> NodeRecord:
    return NodeRecord(path=path, kind=kind, depth=path.count("/"))


def _sample_tree():
    return build_tree(
        [
            _rec("a", D),
            _rec("a/b", D),
            _rec("a/b/c"),
            _rec("a/d"),
            _rec("e"),
        ]
    )


class _EventLog(TreeVisitor):
    def __init__(self, skip: str | None = None) -> None:
        self.events: list[tuple[str, str, int]] = []
        self.skip = skip

    def visit(self, record: NodeRecord, depth: int) -> bool:
        self.events.append(("visit", record.path, depth))
        return True

    def enter_directory(self, record: NodeRecord, depth: int) -> bool:
        self.events.append(("enter", record.path, depth))
        return record.path != self.skip

    def exit_directory(self, record: NodeRecord, depth: int) -> None:
        self.events.append(("exit", record.path, depth))


class TraversalTests(unittest.TestCase):
    def test_depth_first_enters_and_exits_around_subtrees(self) -> None:
        log = _EventLog()

        walk_depth_first(_sample_tree(), log)

        self.assertEqual(
            log.events,
            [
                ("enter", "a", 0),
                ("enter", "a/b", 1),
                ("visit", "a/b/c", 2),
                ("exit", "a/b", 1),
                ("visit", "a/d", 1),
                ("exit", "a", 0),
                ("visit", "e", 0),
            ],
        )

    def test_enter_returning_false_skips_subtree(self) -> None:
        log = _EventLog(skip="a/b")

        walk_depth_first(_sample_tree(), log)

        self.assertNotIn(("visit", "a/b/c", 2), log.events)
        self.assertIn(("exit", "a/b", 1), log.events)
        self.assertIn(("visit", "a/d", 1), log.events)

    def test_breadth_first_visits_level_by_level(self) -> None:
        log = _EventLog()

        walk_breadth_first(_sample_tree(), log)

        self.assertEqual(
            [event[1] for event in log.events if event[0] != "exit"],
            ["a", "e", "a/b", "a/d", "a/b/c"],
        )
        self.assertEqual(
            [event[1] for event in log.events if event[0] == "exit"],
            ["a/b", "a"],
        )

    def test_collect_records_in_each_order(self) -> None:
        tree = _sample_tree()

        pre = [r.path for r in collect_records(tree, TraversalOrder.PRE_ORDER)]
        post = [r.path for r in collect_records(tree, TraversalOrder.POST_ORDER)]
        breadth = [r.path for r in collect_records(tree, TraversalOrder.BREADTH_FIRST)]

        self.assertEqual(pre, ["a", "a/b", "a/b/c", "a/d", "e"])
        self.assertEqual(post, ["a/b/c", "a/b", "a/d", "a", "e"])
        self.assertEqual(breadth, ["a", "e", "a/b", "a/d", "a/b/c"])

    def test_iter_nodes_and_find_record(self) -> None:
        tree = _sample_tree()

        depths = {node.record.path: depth for node, depth in iter_nodes(tree)}
        found = find_record(tree, lambda record: record.name == "d")

        self.assertEqual(depths["a/b/c"], 2)
        self.assertIsNotNone(found)
        self.assertEqual(found.path, "a/d")
        self.assertIsNone(find_record(tree, lambda record: record.name == "zzz"))

    def test_nested_synthetic_node_is_rejected(self) -> None:
        tree = _sample_tree()
        tree.children[0].children.append(TempNode(None))

        with self.assertRaises(TreeBuildError):
            walk_depth_first(tree, TreeVisitor())
        with self.assertRaises(TreeBuildError):
            walk_breadth_first(tree, TreeVisitor())
        with self.assertRaises(TreeBuildError):
            find_record(tree, lambda record: False)


if __name__ == "__main__":
    unittest.main()
