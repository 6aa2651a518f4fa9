"""Snapshot diffing with greedy similarity-based move detection."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..errors import DuplicatePathError
from ..tree_model.types import NodeRecord
from .changes import ChangeKind, ChangeRecord, ChangeSet, DiffSummary
from .options import DiffOptions
from .similarity import similarity_score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveCandidate:
    """One removed/added pairing that met the move threshold."""

    old_path: str
    new_path: str
    score: float


def index_by_path(records: Iterable[NodeRecord]) -> dict[str, NodeRecord]:
    """Map records by path, rejecting collections with a repeated path."""
    index: dict[str, NodeRecord] = {}
    for record in records:
        if record.path in index:
            raise DuplicatePathError(record.path)
        index[record.path] = record
    return index


def _exceeds(old_value: float | None, new_value: float | None, threshold: float) -> bool:
    """Whether two optional metric values differ by more than ``threshold``.

    A value that appears or disappears counts as a difference.
    """
    if old_value is None and new_value is None:
        return False
    if old_value is None or new_value is None:
        return True
    return abs(new_value - old_value) > threshold


def classify_common(old: NodeRecord, new: NodeRecord, options: DiffOptions) -> ChangeKind:
    """Classify a path present in both snapshots."""
    if old.kind is not new.kind:
        return ChangeKind.TYPE_CHANGED
    if _exceeds(old.size, new.size, options.size_threshold):
        return ChangeKind.MODIFIED
    if _exceeds(old.modified_time, new.modified_time, options.time_threshold):
        return ChangeKind.MODIFIED
    if (
        old.content_fingerprint is not None
        and new.content_fingerprint is not None
        and old.content_fingerprint != new.content_fingerprint
    ):
        return ChangeKind.MODIFIED
    return ChangeKind.UNCHANGED


def find_move_candidates(
    removed: Mapping[str, NodeRecord],
    added: Mapping[str, NodeRecord],
    threshold: float,
) -> list[MoveCandidate]:
    """Score every removed/added pair, keeping pairs at or above ``threshold``.

    Result is ordered by descending score, then before-path, then after-path.
    """
    candidates: list[MoveCandidate] = []
    for old_path, old in removed.items():
        for new_path, new in added.items():
            score = similarity_score(old, new)
            if score >= threshold:
                candidates.append(MoveCandidate(old_path, new_path, score))
    candidates.sort(key=lambda item: (-item.score, item.old_path, item.new_path))
    return candidates


def resolve_moves(candidates: Iterable[MoveCandidate]) -> list[MoveCandidate]:
    """Greedily accept the best remaining pair whose both sides are unclaimed.

    This approximates an optimal assignment; it is deterministic given the
    candidate ordering from ``find_move_candidates``.
    """
    claimed_old: set[str] = set()
    claimed_new: set[str] = set()
    accepted: list[MoveCandidate] = []
    for candidate in candidates:
        if candidate.old_path in claimed_old or candidate.new_path in claimed_new:
            continue
        claimed_old.add(candidate.old_path)
        claimed_new.add(candidate.new_path)
        accepted.append(candidate)
    return accepted


def diff_snapshots(
    before: Iterable[NodeRecord],
    after: Iterable[NodeRecord],
    options: DiffOptions | None = None,
) -> ChangeSet:
    """Classify every path of two snapshots and return the visible change set.

    Unchanged paths are always counted in the summary; they are returned
    only when ``options`` asks for them.
    """
    active = options or DiffOptions()
    before_index = index_by_path(before)
    after_index = index_by_path(after)

    changes: list[ChangeRecord] = []
    for path in before_index.keys() & after_index.keys():
        old, new = before_index[path], after_index[path]
        changes.append(ChangeRecord(old, new, classify_common(old, new, active)))

    removed = {path: record for path, record in before_index.items() if path not in after_index}
    added = {path: record for path, record in after_index.items() if path not in before_index}

    if not active.ignore_moves and removed and added:
        moves = resolve_moves(find_move_candidates(removed, added, active.move_threshold))
        for move in moves:
            changes.append(
                ChangeRecord(
                    removed.pop(move.old_path),
                    added.pop(move.new_path),
                    ChangeKind.MOVED,
                    similarity_score=move.score,
                )
            )

    changes.extend(ChangeRecord(record, None, ChangeKind.REMOVED) for record in removed.values())
    changes.extend(ChangeRecord(None, record, ChangeKind.ADDED) for record in added.values())
    changes.sort(key=lambda change: (change.path, change.change_kind.value))

    summary = DiffSummary()
    for change in changes:
        summary.record(change)
    logger.debug(
        "diff: %d added, %d removed, %d modified, %d moved, %d type changed, %d unchanged",
        summary.added,
        summary.removed,
        summary.modified,
        summary.moved,
        summary.type_changed,
        summary.unchanged,
    )

    visible = tuple(change for change in changes if active.shows(change.change_kind))
    return ChangeSet(changes=visible, summary=summary)


__all__ = [
    "MoveCandidate",
    "index_by_path",
    "classify_common",
    "find_move_candidates",
    "resolve_moves",
    "diff_snapshots",
]
