"""Tests for gitignore matcher lookups and cache behavior."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from treelens.gitignore import GitIgnoreMatcher, clear_gitignore_cache, get_gitignore_matcher, load_gitignore_matcher


class GitIgnoreMatcherTests(unittest.TestCase):
    def test_is_ignored_covers_listed_entries_and_descendants(self) -> None:
        matcher = GitIgnoreMatcher(
            root=Path("/repo"),
            ignored_files=frozenset({"debug.log"}),
            ignored_dirs=frozenset({"build", "src/cache"}),
        )

        self.assertTrue(matcher.is_ignored("debug.log"))
        self.assertTrue(matcher.is_ignored("build"))
        self.assertTrue(matcher.is_ignored("build/lib/x.o"))
        self.assertTrue(matcher.is_ignored("src/cache/blob"))
        self.assertFalse(matcher.is_ignored("src/main.py"))
        self.assertFalse(matcher.is_ignored("builder"))

    def test_load_returns_none_without_git(self) -> None:
        with mock.patch("treelens.gitignore.shutil.which", return_value=None):
            self.assertIsNone(load_gitignore_matcher(Path(".")))


class GitignoreMatcherCacheTests(unittest.TestCase):
    def setUp(self) -> None:
        clear_gitignore_cache()

    def tearDown(self) -> None:
        clear_gitignore_cache()

    def test_get_gitignore_matcher_reuses_cached_result_within_ttl(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            sentinel = mock.sentinel.matcher
            with mock.patch("treelens.gitignore.load_gitignore_matcher", return_value=sentinel) as loader:
                first = get_gitignore_matcher(root)
                second = get_gitignore_matcher(root)

            self.assertIs(first, sentinel)
            self.assertIs(second, sentinel)
            self.assertEqual(loader.call_count, 1)

    def test_get_gitignore_matcher_reloads_after_root_mtime_change(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            with mock.patch(
                "treelens.gitignore.load_gitignore_matcher",
                side_effect=[mock.sentinel.first, mock.sentinel.second],
            ) as loader:
                first = get_gitignore_matcher(root)
                stat = root.stat()
                os.utime(root, ns=(stat.st_atime_ns, stat.st_mtime_ns + 5_000_000_000))
                second = get_gitignore_matcher(root)

            self.assertIs(first, mock.sentinel.first)
            self.assertIs(second, mock.sentinel.second)
            self.assertEqual(loader.call_count, 2)


if __name__ == "__main__":
    unittest.main()
