"""Similarity scoring between a removed and an added record for move detection.

The score is a weighted mean of name, size, and modified-time closeness,
renormalized over the factors both records can supply, then scaled down
when the entry kinds disagree.
"""

from __future__ import annotations

from ..tree_model.types import NodeRecord

NAME_WEIGHT = 0.4
SIZE_WEIGHT = 0.4
TIME_WEIGHT = 0.2
KIND_MISMATCH_FACTOR = 0.5
TIME_HORIZON_SECONDS = 3600.0


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum single-character insertions, deletions, and substitutions."""
    if len(a) < len(b):
        a, b = b, a
    previous = list(range(len(b) + 1))
    for i, a_char in enumerate(a, start=1):
        current = [i]
        for j, b_char in enumerate(b, start=1):
            current.append(
                min(
                    previous[j] + 1,
                    current[j - 1] + 1,
                    previous[j - 1] + (a_char != b_char),
                )
            )
        previous = current
    return previous[-1]


def name_similarity(a: str, b: str) -> float:
    """``1 - edit_distance / longer_length``; two empty names are identical."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein_distance(a, b) / longest


def size_closeness(a: int, b: int) -> float:
    """Ratio of the smaller size to the larger."""
    if a == b:
        return 1.0
    smaller, larger = sorted((a, b))
    if larger <= 0:
        return 1.0
    return max(0.0, smaller) / larger


def time_closeness(a: float, b: float) -> float:
    """Linear decay from 1.0 at equal times to 0.0 at one hour apart."""
    delta = abs(a - b)
    if delta >= TIME_HORIZON_SECONDS:
        return 0.0
    return 1.0 - delta / TIME_HORIZON_SECONDS


def similarity_score(old: NodeRecord, new: NodeRecord) -> float:
    """Score in ``[0, 1]`` for treating ``old`` -> ``new`` as one moved entry."""
    if (
        old.content_fingerprint is not None
        and new.content_fingerprint is not None
        and old.content_fingerprint == new.content_fingerprint
    ):
        score = 1.0
    else:
        total = NAME_WEIGHT * name_similarity(old.name, new.name)
        weights = NAME_WEIGHT
        if old.size is not None and new.size is not None:
            total += SIZE_WEIGHT * size_closeness(old.size, new.size)
            weights += SIZE_WEIGHT
        if old.modified_time is not None and new.modified_time is not None:
            total += TIME_WEIGHT * time_closeness(old.modified_time, new.modified_time)
            weights += TIME_WEIGHT
        score = total / weights

    if old.kind is not new.kind:
        score *= KIND_MISMATCH_FACTOR
    return min(1.0, max(0.0, score))


__all__ = [
    "NAME_WEIGHT",
    "SIZE_WEIGHT",
    "TIME_WEIGHT",
    "KIND_MISMATCH_FACTOR",
    "TIME_HORIZON_SECONDS",
    "levenshtein_distance",
    "name_similarity",
    "size_closeness",
    "time_closeness",
    "similarity_score",
]
