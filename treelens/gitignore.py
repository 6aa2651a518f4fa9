"""Gitignore-aware filtering for directory scans.

Asks git which untracked paths under a scan root are ignored and answers
membership queries in root-relative slash form, the same form node records
use for their paths.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
import time
from collections import OrderedDict
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

GITIGNORE_MATCHER_CACHE_MAX = 16
GITIGNORE_MATCHER_CACHE_TTL_SECONDS = 2.0


@dataclass(frozen=True)
class GitIgnoreMatcher:
    """Ignored paths below ``root``, relative to it.

    A path is ignored when it is listed directly or sits below an ignored
    directory.
    """

    root: Path
    ignored_files: frozenset[str]
    ignored_dirs: frozenset[str]

    def is_ignored(self, relative_path: str) -> bool:
        if relative_path in self.ignored_files or relative_path in self.ignored_dirs:
            return True
        parts = relative_path.split("/")
        for end in range(len(parts) - 1, 0, -1):
            if "/".join(parts[:end]) in self.ignored_dirs:
                return True
        return False


@dataclass(frozen=True)
class _CacheEntry:
    matcher: GitIgnoreMatcher | None
    root_mtime_ns: int | None
    loaded_at: float


_MATCHER_CACHE: OrderedDict[str, _CacheEntry] = OrderedDict()


def clear_gitignore_cache() -> None:
    _MATCHER_CACHE.clear()


def _relative_to(path: Path, root: Path) -> str | None:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return None


def _run_git(args: list[str]) -> bytes | None:
    try:
        proc = subprocess.run(
            ["git", *args],
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=True,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        logger.debug("git %s failed: %s", " ".join(args), exc)
        return None
    return proc.stdout


def load_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Query git for ignored entries below ``root``.

    Returns ``None`` when git is missing or ``root`` is not inside a work tree.
    """
    if shutil.which("git") is None:
        logger.debug("git not found; gitignore filtering disabled")
        return None

    root = root.resolve()
    top = _run_git(["-C", str(root), "rev-parse", "--show-toplevel"])
    if not top or not top.strip():
        return None
    repo_root = Path(top.decode("utf-8", errors="replace").strip()).resolve()
    if _relative_to(root, repo_root) is None:
        return None

    listing = _run_git(
        [
            "-C",
            str(repo_root),
            "ls-files",
            "-z",
            "--others",
            "-i",
            "--exclude-standard",
            "--directory",
        ]
    )
    if listing is None:
        return None

    ignored_files: set[str] = set()
    ignored_dirs: set[str] = set()
    for raw in listing.split(b"\x00"):
        entry = raw.decode("utf-8", errors="replace")
        if not entry:
            continue
        is_dir = entry.endswith("/")
        absolute = (repo_root / entry.rstrip("/")).resolve()
        relative = _relative_to(absolute, root)
        if not relative or relative == ".":
            continue
        if is_dir or absolute.is_dir():
            ignored_dirs.add(relative)
        else:
            ignored_files.add(relative)

    logger.debug(
        "gitignore: %d files, %d directories ignored under %s",
        len(ignored_files),
        len(ignored_dirs),
        root,
    )
    return GitIgnoreMatcher(
        root=root,
        ignored_files=frozenset(ignored_files),
        ignored_dirs=frozenset(ignored_dirs),
    )


def get_gitignore_matcher(root: Path) -> GitIgnoreMatcher | None:
    """Return a cached matcher for ``root``, reloading when stale."""
    resolved = root.resolve()
    key = str(resolved)
    try:
        root_mtime_ns: int | None = resolved.stat().st_mtime_ns
    except OSError:
        root_mtime_ns = None
    now = time.monotonic()

    cached = _MATCHER_CACHE.get(key)
    if (
        cached is not None
        and cached.root_mtime_ns == root_mtime_ns
        and now - cached.loaded_at <= GITIGNORE_MATCHER_CACHE_TTL_SECONDS
    ):
        _MATCHER_CACHE.move_to_end(key)
        return cached.matcher

    matcher = load_gitignore_matcher(resolved)
    _MATCHER_CACHE[key] = _CacheEntry(matcher, root_mtime_ns, now)
    _MATCHER_CACHE.move_to_end(key)
    while len(_MATCHER_CACHE) > GITIGNORE_MATCHER_CACHE_MAX:
        _MATCHER_CACHE.popitem(last=False)
    return matcher


__all__ = [
    "GitIgnoreMatcher",
    "clear_gitignore_cache",
    "load_gitignore_matcher",
    "get_gitignore_matcher",
]
