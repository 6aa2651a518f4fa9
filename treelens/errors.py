"""Exception types raised by tree building, snapshot diffing, and config parsing.

Every error here reflects a contract violation by an upstream producer or an
invalid option supplied by the caller. The CLI turns them into exit messages.
"""

from __future__ import annotations


class TreeLensError(Exception):
    """Base class for all treelens errors."""


class TreeBuildError(TreeLensError):
    """Flat record sequence has a malformed depth sequence."""


class DuplicatePathError(TreeLensError):
    """A record collection contains the same path more than once."""

    def __init__(self, path: str) -> None:
        super().__init__(f"duplicate path in record collection: {path!r}")
        self.path = path


class ConfigError(TreeLensError, ValueError):
    """Sort or diff option outside its valid range."""


class SnapshotFormatError(TreeLensError):
    """Persisted snapshot JSON does not decode to valid node records."""


__all__ = [
    "TreeLensError",
    "TreeBuildError",
    "DuplicatePathError",
    "ConfigError",
    "SnapshotFormatError",
]
