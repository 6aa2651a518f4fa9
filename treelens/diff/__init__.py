"""Snapshot comparison for node-record collections.

Classifies paths as added, removed, modified, moved, type-changed, or
unchanged, and formats the resulting change set as text.
"""

from __future__ import annotations

from .changes import ChangeKind, ChangeRecord, ChangeSet, DiffSummary
from .engine import (
    MoveCandidate,
    classify_common,
    diff_snapshots,
    find_move_candidates,
    index_by_path,
    resolve_moves,
)
from .options import DEFAULT_MOVE_THRESHOLD, DiffOptions, parse_show_only
from .rendering import format_change_line, format_change_set, format_summary_lines
from .similarity import levenshtein_distance, name_similarity, similarity_score

__all__ = [
    "ChangeKind",
    "ChangeRecord",
    "ChangeSet",
    "DiffSummary",
    "DEFAULT_MOVE_THRESHOLD",
    "DiffOptions",
    "parse_show_only",
    "MoveCandidate",
    "index_by_path",
    "classify_common",
    "find_move_candidates",
    "resolve_moves",
    "diff_snapshots",
    "levenshtein_distance",
    "name_similarity",
    "similarity_score",
    "format_change_line",
    "format_summary_lines",
    "format_change_set",
]
