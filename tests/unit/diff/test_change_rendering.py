"""Tests for change-set text rendering."""

from __future__ import annotations

import unittest

from treelens.diff import ChangeKind, ChangeRecord, DiffOptions, diff_snapshots, format_change_line, format_change_set
from treelens.tree_model import NodeKind, NodeRecord


def _rec(path: str, kind: NodeKind = NodeKind.FILE, **metadata) -> NodeRecord:
    return NodeRecord(path=path, kind=kind, depth=path.count("/"), **metadata)


class FormatChangeLineTests(unittest.TestCase):
    def test_markers(self) -> None:
        self.assertEqual(format_change_line(ChangeRecord(None, _rec("a"), ChangeKind.ADDED)), "+ a")
        self.assertEqual(format_change_line(ChangeRecord(_rec("d", NodeKind.DIRECTORY), None, ChangeKind.REMOVED)), "- d/")
        self.assertEqual(format_change_line(ChangeRecord(_rec("m"), _rec("m"), ChangeKind.UNCHANGED)), "= m")

    def test_move_shows_source_and_score(self) -> None:
        change = ChangeRecord(_rec("old.txt"), _rec("new.txt"), ChangeKind.MOVED, similarity_score=0.8286)

        self.assertEqual(format_change_line(change), "~ new.txt  (from old.txt, similarity 0.83)")

    def test_type_change_shows_kinds(self) -> None:
        change = ChangeRecord(_rec("x"), _rec("x", NodeKind.DIRECTORY), ChangeKind.TYPE_CHANGED)

        self.assertEqual(format_change_line(change), "T x/  (file -> directory)")

    def test_sizes_when_requested(self) -> None:
        modified = ChangeRecord(_rec("f", size=100), _rec("f", size=2148), ChangeKind.MODIFIED)
        added = ChangeRecord(None, _rec("g", size=512), ChangeKind.ADDED)

        self.assertEqual(format_change_line(modified, show_size=True), "M f  (+2.0K)")
        self.assertEqual(format_change_line(modified), "M f")
        self.assertEqual(format_change_line(added, show_size=True), "+ g  (512B)")


class FormatChangeSetTests(unittest.TestCase):
    def test_full_output(self) -> None:
        before = [_rec("d", NodeKind.DIRECTORY), _rec("d/f1", size=5)]
        after = [_rec("d", NodeKind.DIRECTORY), _rec("n", NodeKind.DIRECTORY)]
        change_set = diff_snapshots(before, after, DiffOptions(ignore_moves=True))

        lines = format_change_set(change_set)

        self.assertEqual(
            lines,
            [
                "- d/f1",
                "+ n/",
                "",
                "Changes Summary:",
                "  1 directory added (+)",
                "  1 file removed (-)",
                "  1 unchanged (=)",
                "  net size change: -5B",
            ],
        )

    def test_stats_only_and_no_changes(self) -> None:
        records = [_rec("a", size=1)]
        change_set = diff_snapshots(records, records)

        self.assertEqual(format_change_set(change_set, stats_only=True), ["Changes Summary:", "  1 unchanged (=)", "  no changes"])


if __name__ == "__main__":
    unittest.main()
