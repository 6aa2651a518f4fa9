"""Tests for per-level sibling sorting."""

from __future__ import annotations

import unittest

from treelens.errors import ConfigError
from treelens.tree_model import (
    DirectoryOrder,
    NodeKind,
    NodeRecord,
    SortKey,
    SortOptions,
    build_tree,
    compare_version_strings,
    record_comparator,
    sort_records,
    sort_tree,
)


def _rec(path: str, kind: NodeKind = NodeKind.FILE, **metadata) -> NodeRecord:
    return NodeRecord(path=path, kind=kind, depth=path.count("/"), **metadata)


def _names(records: list[NodeRecord]) -> list[str]:
    return [record.path for record in records]


class SortKeyParsingTests(unittest.TestCase):
    def test_from_string_accepts_values_and_aliases(self) -> None:
        self.assertIs(SortKey.from_string("size"), SortKey.SIZE)
        self.assertIs(SortKey.from_string(" MTIME "), SortKey.MODIFIED_TIME)
        self.assertIs(SortKey.from_string("modified_time"), SortKey.MODIFIED_TIME)
        self.assertIs(SortKey.from_string("line-count"), SortKey.LINE_COUNT)
        self.assertIs(SortKey.from_string("unsorted"), SortKey.NONE)

    def test_from_string_rejects_unknown_key(self) -> None:
        with self.assertRaises(ConfigError):
            SortKey.from_string("colour")

    def test_directory_order_from_string(self) -> None:
        self.assertIs(DirectoryOrder.from_string("dirs_first"), DirectoryOrder.DIRECTORIES_FIRST)
        self.assertIs(DirectoryOrder.from_string("files-first"), DirectoryOrder.FILES_FIRST)
        with self.assertRaises(ConfigError):
            DirectoryOrder.from_string("sideways")


class VersionCompareTests(unittest.TestCase):
    def test_numeric_runs_compare_by_value(self) -> None:
        self.assertLess(compare_version_strings("file-2", "file-10"), 0)
        self.assertGreater(compare_version_strings("v1.10", "v1.9"), 0)
        self.assertEqual(compare_version_strings("a1", "a1"), 0)

    def test_text_runs_compare_lexicographically(self) -> None:
        self.assertLess(compare_version_strings("alpha1", "beta1"), 0)
        self.assertLess(compare_version_strings("a", "a1"), 0)


class SortRecordsTests(unittest.TestCase):
    def test_name_sort_uses_code_point_order(self) -> None:
        records = [_rec("b"), _rec("a"), _rec("B"), _rec("A")]

        result = sort_records(records, SortOptions(key=SortKey.NAME))

        self.assertEqual(_names(result), ["A", "B", "a", "b"])

    def test_reverse_inverts_name_order(self) -> None:
        records = [_rec("a"), _rec("c"), _rec("b")]

        result = sort_records(records, SortOptions(key=SortKey.NAME, reverse=True))

        self.assertEqual(_names(result), ["c", "b", "a"])

    def test_dirs_first_partition_is_not_reversed(self) -> None:
        records = [
            _rec("a.txt"),
            _rec("z", NodeKind.DIRECTORY),
            _rec("m.txt"),
            _rec("b", NodeKind.DIRECTORY),
        ]

        options = SortOptions(
            key=SortKey.NAME,
            directory_order=DirectoryOrder.DIRECTORIES_FIRST,
            reverse=True,
        )
        result = sort_records(records, options)

        self.assertEqual(_names(result), ["z", "b", "m.txt", "a.txt"])

    def test_files_first_puts_directories_last(self) -> None:
        records = [_rec("d", NodeKind.DIRECTORY), _rec("f"), _rec("s", NodeKind.SYMLINK)]

        result = sort_records(records, SortOptions(directory_order=DirectoryOrder.FILES_FIRST))

        self.assertEqual(_names(result), ["f", "s", "d"])

    def test_size_sort_places_missing_sizes_last_and_breaks_ties_by_name(self) -> None:
        records = [
            _rec("big", size=300),
            _rec("none"),
            _rec("b-small", size=10),
            _rec("a-small", size=10),
        ]

        result = sort_records(records, SortOptions(key=SortKey.SIZE))

        self.assertEqual(_names(result), ["a-small", "b-small", "big", "none"])

    def test_modified_time_sort(self) -> None:
        records = [_rec("new", modified_time=200.0), _rec("old", modified_time=100.0)]

        result = sort_records(records, SortOptions(key=SortKey.MODIFIED_TIME))

        self.assertEqual(_names(result), ["old", "new"])

    def test_version_sort(self) -> None:
        records = [_rec("file-10"), _rec("file-2"), _rec("file-1")]

        result = sort_records(records, SortOptions(key=SortKey.VERSION))

        self.assertEqual(_names(result), ["file-1", "file-2", "file-10"])

    def test_line_count_and_custom_sorts(self) -> None:
        records = [_rec("x", line_count=5, custom_score=2.0), _rec("y", line_count=1, custom_score=1.0), _rec("z")]

        by_lines = sort_records(records, SortOptions(key=SortKey.LINE_COUNT))
        by_custom = sort_records(records, SortOptions(key=SortKey.CUSTOM))

        self.assertEqual(_names(by_lines), ["y", "x", "z"])
        self.assertEqual(_names(by_custom), ["y", "x", "z"])

    def test_sorting_keeps_children_under_their_parent(self) -> None:
        records = [
            _rec("b", NodeKind.DIRECTORY),
            _rec("b/2"),
            _rec("b/1"),
            _rec("a", NodeKind.DIRECTORY),
            _rec("a/z"),
            _rec("a/y"),
        ]

        result = sort_records(records, SortOptions())

        self.assertEqual(_names(result), ["a", "a/y", "a/z", "b", "b/1", "b/2"])
        self.assertEqual([record.depth for record in result], [0, 1, 1, 0, 1, 1])

    def test_none_key_preserves_order(self) -> None:
        records = [_rec("c"), _rec("a"), _rec("b")]

        result = sort_records(records, SortOptions(key=SortKey.NONE))

        self.assertEqual(_names(result), ["c", "a", "b"])

    def test_none_key_with_dirs_first_partitions_stably(self) -> None:
        records = [_rec("c"), _rec("z", NodeKind.DIRECTORY), _rec("a"), _rec("y", NodeKind.DIRECTORY)]

        result = sort_records(
            records,
            SortOptions(key=SortKey.NONE, directory_order=DirectoryOrder.DIRECTORIES_FIRST),
        )

        self.assertEqual(_names(result), ["z", "y", "c", "a"])

    def test_sort_tree_sorts_in_place(self) -> None:
        root = build_tree([_rec("b"), _rec("a")])

        sort_tree(root, SortOptions())

        self.assertEqual([child.name for child in root.children], ["a", "b"])

    def test_sorting_is_idempotent(self) -> None:
        records = [_rec("b", NodeKind.DIRECTORY), _rec("b/x", size=3), _rec("b/y", size=1), _rec("a", size=2)]
        options = SortOptions(key=SortKey.SIZE, directory_order=DirectoryOrder.DIRECTORIES_FIRST)

        once = sort_records(records, options)

        self.assertEqual(sort_records(once, options), once)

    def test_none_key_has_no_comparator(self) -> None:
        with self.assertRaises(ConfigError):
            record_comparator(SortKey.NONE)


if __name__ == "__main__":
    unittest.main()
