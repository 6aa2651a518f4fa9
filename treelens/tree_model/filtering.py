"""Glob include/exclude filtering over flat pre-order record sequences."""

from __future__ import annotations

import fnmatch
from collections.abc import Iterable, Sequence

from .types import NodeRecord


def matches_any(record: NodeRecord, patterns: Sequence[str]) -> bool:
    """Match patterns with a slash against the full path, others against the name."""
    for pattern in patterns:
        target = record.path if "/" in pattern else record.name
        if fnmatch.fnmatch(target, pattern):
            return True
    return False


def filter_records(
    records: Iterable[NodeRecord],
    include: Sequence[str] = (),
    exclude: Sequence[str] = (),
) -> list[NodeRecord]:
    """Keep records passing the glob filters without breaking sibling contiguity.

    An excluded directory drops its whole subtree. Include patterns apply to
    non-directories only, so directories survive until the pruner removes the
    ones left empty.
    """
    kept: list[NodeRecord] = []
    skip_below: int | None = None
    for record in records:
        if skip_below is not None:
            if record.depth > skip_below:
                continue
            skip_below = None

        if exclude and matches_any(record, exclude):
            if record.is_dir:
                skip_below = record.depth
            continue
        if include and not record.is_dir and not matches_any(record, include):
            continue
        kept.append(record)
    return kept


__all__ = [
    "matches_any",
    "filter_records",
]
