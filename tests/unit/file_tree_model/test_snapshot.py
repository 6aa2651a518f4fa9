"""Tests for JSON snapshot persistence."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from treelens.errors import SnapshotFormatError
from treelens.file_tree_model import load_snapshot, records_from_json, records_to_json, save_snapshot
from treelens.tree_model import NodeKind, NodeRecord


class SnapshotTests(unittest.TestCase):
    def test_save_and_load(self) -> None:
        records = [
            NodeRecord(path="d", kind=NodeKind.DIRECTORY, depth=0, modified_time=1.5),
            NodeRecord(path="d/f", kind=NodeKind.FILE, depth=1, size=3, content_fingerprint="abc"),
        ]
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "nested" / "snap.json"

            save_snapshot(target, records)

            self.assertEqual(load_snapshot(target), records)

    def test_unset_fields_are_omitted(self) -> None:
        text = records_to_json([NodeRecord(path="a", kind=NodeKind.FILE, depth=0)])

        self.assertEqual(json.loads(text), [{"path": "a", "kind": "file", "depth": 0}])

    def test_depth_recomputed_when_absent(self) -> None:
        records = records_from_json('[{"path": "a/b/c", "kind": "symlink"}]')

        self.assertEqual(records[0].depth, 2)
        self.assertIs(records[0].kind, NodeKind.SYMLINK)

    def test_malformed_documents_raise(self) -> None:
        bad_documents = [
            "not json",
            '{"path": "a"}',
            '[{"kind": "file"}]',
            '[{"path": "a", "kind": "socket"}]',
            '[{"path": "a/b", "kind": "file", "depth": 0}]',
            '[{"path": "a", "kind": "file", "size": -1}]',
            '[{"path": "a", "kind": "file", "size": true}]',
            '[{"path": "/abs", "kind": "file"}]',
            '[{"path": "a//b", "kind": "file"}]',
            "[1]",
        ]
        for document in bad_documents:
            with self.subTest(document=document):
                with self.assertRaises(SnapshotFormatError):
                    records_from_json(document)

    def test_missing_file_raises_snapshot_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(SnapshotFormatError):
                load_snapshot(Path(tmp) / "absent.json")


if __name__ == "__main__":
    unittest.main()
