"""Filesystem-facing collaborators: directory walks and snapshot files."""

from __future__ import annotations

from .fs import list_directory_children, read_text_stats, walk_directory
from .snapshot import load_snapshot, records_from_json, records_to_json, save_snapshot

__all__ = [
    "list_directory_children",
    "read_text_stats",
    "walk_directory",
    "records_to_json",
    "records_from_json",
    "save_snapshot",
    "load_snapshot",
]
