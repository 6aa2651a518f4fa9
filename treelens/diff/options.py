"""Validated options for snapshot diffing."""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

from ..errors import ConfigError
from .changes import ChangeKind

DEFAULT_MOVE_THRESHOLD = 0.8


@dataclass(frozen=True)
class DiffOptions:
    """Thresholds and output filters for ``diff_snapshots``.

    Construction fails with ``ConfigError`` before any comparison work when
    ``move_threshold`` is outside ``[0, 1]`` or a threshold is negative.
    ``size_threshold`` is in bytes and ``time_threshold`` in seconds; a value
    must differ by strictly more than its threshold to count as modified.
    """

    move_threshold: float = DEFAULT_MOVE_THRESHOLD
    size_threshold: int = 0
    time_threshold: float = 0.0
    ignore_moves: bool = False
    show_unchanged: bool = False
    show_only: frozenset[ChangeKind] = frozenset()

    def __post_init__(self) -> None:
        if math.isnan(self.move_threshold) or not 0.0 <= self.move_threshold <= 1.0:
            raise ConfigError(f"move threshold must be between 0.0 and 1.0, got {self.move_threshold}")
        if math.isnan(self.size_threshold) or self.size_threshold < 0:
            raise ConfigError(f"size threshold must be non-negative, got {self.size_threshold}")
        if math.isnan(self.time_threshold) or self.time_threshold < 0:
            raise ConfigError(f"time threshold must be non-negative, got {self.time_threshold}")

    def shows(self, kind: ChangeKind) -> bool:
        """Whether changes of ``kind`` belong in the returned change list."""
        if self.show_only:
            return kind in self.show_only
        return kind is not ChangeKind.UNCHANGED or self.show_unchanged


def parse_show_only(values: Iterable[str]) -> frozenset[ChangeKind]:
    """Parse comma-separated change names (``added,mv``) into change kinds."""
    kinds: set[ChangeKind] = set()
    for value in values:
        for part in value.split(","):
            if part.strip():
                kinds.add(ChangeKind.from_string(part))
    return frozenset(kinds)


__all__ = [
    "DEFAULT_MOVE_THRESHOLD",
    "DiffOptions",
    "parse_show_only",
]
