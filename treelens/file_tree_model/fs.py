"""Filesystem scanning into flat pre-order node-record sequences."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from ..gitignore import GitIgnoreMatcher, get_gitignore_matcher
from ..tree_model.types import NodeKind, NodeRecord, path_depth

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DirectoryChild:
    """One visible directory entry plus its stat metadata."""

    name: str
    path: Path
    kind: NodeKind
    size: int | None
    modified_time: float | None
    change_time: float | None
    create_time: float | None = None


BINARY_PROBE_BYTES = 4096


def safe_entry_kind(entry: os.DirEntry[str]) -> NodeKind:
    """Entry kind without following symlinks; unreadable entries count as files."""
    try:
        if entry.is_symlink():
            return NodeKind.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return NodeKind.DIRECTORY
    except OSError:
        pass
    return NodeKind.FILE


def maybe_gitignore_matcher(root: Path, skip_gitignored: bool) -> GitIgnoreMatcher | None:
    if not skip_gitignored:
        return None
    return get_gitignore_matcher(root)


def list_directory_children(
    directory: Path,
    show_hidden: bool,
) -> tuple[list[DirectoryChild], OSError | None]:
    """List visible children of ``directory`` sorted by name.

    Returns ``(children, scan_error)``; ``scan_error`` is set when the
    directory itself cannot be scanned.
    """
    children: list[DirectoryChild] = []
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                if not show_hidden and entry.name.startswith("."):
                    continue
                kind = safe_entry_kind(entry)
                size: int | None = None
                modified_time: float | None = None
                change_time: float | None = None
                create_time: float | None = None
                try:
                    stat = entry.stat(follow_symlinks=False)
                    modified_time = stat.st_mtime
                    change_time = stat.st_ctime
                    create_time = getattr(stat, "st_birthtime", None)
                    if kind is not NodeKind.DIRECTORY:
                        size = int(stat.st_size)
                except OSError as exc:
                    logger.debug("stat failed for %s: %s", entry.path, exc)
                children.append(
                    DirectoryChild(
                        name=entry.name,
                        path=Path(entry.path),
                        kind=kind,
                        size=size,
                        modified_time=modified_time,
                        change_time=change_time,
                        create_time=create_time,
                    )
                )
    except OSError as exc:
        return [], exc

    children.sort(key=lambda child: child.name)
    return children, None


def read_text_stats(path: Path) -> tuple[int, int] | None:
    """Return ``(line_count, word_count)`` for a text file.

    Binary files (a NUL byte in the leading sample) and unreadable files
    yield ``None``.
    """
    try:
        data = path.read_bytes()
    except OSError as exc:
        logger.debug("cannot read %s for text stats: %s", path, exc)
        return None
    if b"\x00" in data[:BINARY_PROBE_BYTES]:
        return None
    text = data.decode("utf-8", errors="replace")
    return len(text.splitlines()), len(text.split())


def _child_records(
    directory: Path,
    prefix: str,
    show_hidden: bool,
    ignore_matcher: GitIgnoreMatcher | None,
    text_stats: bool = False,
) -> list[tuple[NodeRecord, Path]]:
    children, scan_error = list_directory_children(directory, show_hidden)
    if scan_error is not None:
        logger.warning("skipping unreadable directory %s: %s", directory, scan_error)
        return []
    records: list[tuple[NodeRecord, Path]] = []
    for child in children:
        relative = f"{prefix}/{child.name}" if prefix else child.name
        if ignore_matcher is not None and ignore_matcher.is_ignored(relative):
            continue
        line_count: int | None = None
        word_count: int | None = None
        if text_stats and child.kind is NodeKind.FILE:
            stats = read_text_stats(child.path)
            if stats is not None:
                line_count, word_count = stats
        record = NodeRecord(
            path=relative,
            kind=child.kind,
            depth=path_depth(relative),
            size=child.size,
            modified_time=child.modified_time,
            change_time=child.change_time,
            create_time=child.create_time,
            line_count=line_count,
            word_count=word_count,
        )
        records.append((record, child.path))
    return records


def walk_directory(
    root: Path,
    show_hidden: bool = False,
    skip_gitignored: bool = False,
    max_depth: int | None = None,
    text_stats: bool = False,
) -> list[NodeRecord]:
    """Scan ``root`` into records in depth-first pre-order.

    Paths are relative to ``root`` and the root itself is not emitted, so
    top-level entries have depth 0. ``max_depth`` bounds the deepest emitted
    record depth. Unreadable directories are logged and skipped.

    With ``text_stats`` every regular text file is read to fill
    ``line_count`` and ``word_count``.
    """
    root = root.resolve()
    if not root.is_dir():
        raise NotADirectoryError(str(root))
    ignore_matcher = maybe_gitignore_matcher(root, skip_gitignored)

    records: list[NodeRecord] = []
    stack = list(reversed(_child_records(root, "", show_hidden, ignore_matcher, text_stats)))
    while stack:
        record, path = stack.pop()
        records.append(record)
        if record.kind is NodeKind.DIRECTORY and (max_depth is None or record.depth < max_depth):
            stack.extend(reversed(_child_records(path, record.path, show_hidden, ignore_matcher, text_stats)))
    logger.debug("walked %s: %d records", root, len(records))
    return records


__all__ = [
    "DirectoryChild",
    "safe_entry_kind",
    "maybe_gitignore_matcher",
    "list_directory_children",
    "read_text_stats",
    "walk_directory",
]
