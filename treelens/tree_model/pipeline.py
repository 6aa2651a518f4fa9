"""Listing pipeline: filter, build, prune, limit, sort, and flatten records."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .build import build_tree, flatten_tree
from .filtering import filter_records
from .pruning import limit_depth, prune_empty_directories
from .sorting import SortOptions, sort_tree
from .types import NodeRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListingOptions:
    sort: SortOptions = field(default_factory=SortOptions)
    include: tuple[str, ...] = ()
    exclude: tuple[str, ...] = ()
    max_depth: int | None = None
    prune_empty: bool = False
    directories_only: bool = False


def process_records(records: Iterable[NodeRecord], options: ListingOptions | None = None) -> list[NodeRecord]:
    """Run one listing pass over walk output and return renderer-ready records.

    Pruning runs on the full tree before the depth limit, so a directory
    whose files sit below the cutoff still counts as non-empty.
    """
    active = options or ListingOptions()
    filtered = filter_records(records, include=active.include, exclude=active.exclude)
    if active.directories_only:
        filtered = [record for record in filtered if record.is_dir]
    if not filtered:
        return []

    root = build_tree(filtered)
    if active.prune_empty:
        removed = prune_empty_directories(root)
        logger.debug("pruned %d empty directories", removed)
    if active.max_depth is not None:
        limit_depth(root, active.max_depth)
    sort_tree(root, active.sort)
    return flatten_tree(root)


__all__ = [
    "ListingOptions",
    "process_records",
]
