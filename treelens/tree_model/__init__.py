"""Working-tree model for flat filesystem record sequences.

This package contains the pure, I/O-free tree primitives:
- node records and transient hierarchy wrappers
- flat pre-order sequence <-> tree conversion
- per-level sibling sorting with pluggable keys and directory grouping
- post-order pruning, depth limiting, and visitor traversals
- glob filtering, the listing pipeline, and text row formatting
"""

from __future__ import annotations

from .build import build_tree, ensure_unique_paths, flatten_tree
from .filtering import filter_records, matches_any
from .pipeline import ListingOptions, process_records
from .pruning import limit_depth, prune_empty_directories, prune_tree
from .rendering import format_size, format_tree_lines
from .sorting import (
    DirectoryOrder,
    SortKey,
    SortOptions,
    compare_version_strings,
    record_comparator,
    sort_records,
    sort_siblings,
    sort_tree,
)
from .traversal import (
    TraversalOrder,
    TreeVisitor,
    collect_records,
    find_record,
    iter_nodes,
    walk_breadth_first,
    walk_depth_first,
)
from .types import NodeKind, NodeRecord, TempNode, path_depth

__all__ = [
    "NodeKind",
    "NodeRecord",
    "TempNode",
    "path_depth",
    "ensure_unique_paths",
    "build_tree",
    "flatten_tree",
    "SortKey",
    "DirectoryOrder",
    "SortOptions",
    "compare_version_strings",
    "record_comparator",
    "sort_siblings",
    "sort_tree",
    "sort_records",
    "prune_empty_directories",
    "prune_tree",
    "limit_depth",
    "TraversalOrder",
    "TreeVisitor",
    "walk_depth_first",
    "walk_breadth_first",
    "collect_records",
    "iter_nodes",
    "find_record",
    "matches_any",
    "filter_records",
    "ListingOptions",
    "process_records",
    "format_size",
    "format_tree_lines",
]
