"""Tests for move-similarity scoring."""

from __future__ import annotations

import unittest

from treelens.diff import levenshtein_distance, name_similarity, similarity_score
from treelens.diff.similarity import size_closeness, time_closeness
from treelens.tree_model import NodeKind, NodeRecord


def _rec(path: str, kind: NodeKind = NodeKind.FILE, **metadata) -> NodeRecord:
    return NodeRecord(path=path, kind=kind, depth=path.count("/"), **metadata)


class EditDistanceTests(unittest.TestCase):
    def test_levenshtein_distance(self) -> None:
        self.assertEqual(levenshtein_distance("", ""), 0)
        self.assertEqual(levenshtein_distance("abc", ""), 3)
        self.assertEqual(levenshtein_distance("kitten", "sitting"), 3)
        self.assertEqual(levenshtein_distance("flaw", "lawn"), 2)

    def test_name_similarity_is_normalized(self) -> None:
        self.assertEqual(name_similarity("", ""), 1.0)
        self.assertEqual(name_similarity("same", "same"), 1.0)
        self.assertAlmostEqual(name_similarity("old.txt", "new.txt"), 4 / 7)


class ClosenessTests(unittest.TestCase):
    def test_size_closeness(self) -> None:
        self.assertEqual(size_closeness(0, 0), 1.0)
        self.assertEqual(size_closeness(50, 100), 0.5)
        self.assertEqual(size_closeness(0, 100), 0.0)

    def test_time_closeness_decays_over_an_hour(self) -> None:
        self.assertEqual(time_closeness(10.0, 10.0), 1.0)
        self.assertAlmostEqual(time_closeness(0.0, 1800.0), 0.5)
        self.assertEqual(time_closeness(0.0, 7200.0), 0.0)


class SimilarityScoreTests(unittest.TestCase):
    def test_renormalizes_over_available_factors(self) -> None:
        score = similarity_score(_rec("a/report.txt"), _rec("b/report.txt"))

        self.assertEqual(score, 1.0)

    def test_kind_mismatch_halves_score(self) -> None:
        same = similarity_score(_rec("x", size=10), _rec("x", size=10))
        mismatched = similarity_score(_rec("x", size=10), _rec("x", NodeKind.SYMLINK, size=10))

        self.assertEqual(same, 1.0)
        self.assertEqual(mismatched, 0.5)

    def test_equal_fingerprints_score_one(self) -> None:
        old = _rec("abc", size=1, modified_time=0.0, content_fingerprint="h")
        new = _rec("xyz", size=1000, modified_time=99999.0, content_fingerprint="h")

        self.assertEqual(similarity_score(old, new), 1.0)

    def test_score_stays_in_unit_interval(self) -> None:
        score = similarity_score(_rec("a", size=0, modified_time=0.0), _rec("bbbb", size=10**9, modified_time=10**7))

        self.assertGreaterEqual(score, 0.0)
        self.assertLessEqual(score, 1.0)


if __name__ == "__main__":
    unittest.main()
