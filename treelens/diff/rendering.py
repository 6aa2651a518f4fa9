"""Plain-text formatting for change sets."""

from __future__ import annotations

from ..tree_model.rendering import format_size
from .changes import ChangeKind, ChangeRecord, ChangeSet, DiffSummary

CHANGE_MARKERS: dict[ChangeKind, str] = {
    ChangeKind.ADDED: "+",
    ChangeKind.REMOVED: "-",
    ChangeKind.MODIFIED: "M",
    ChangeKind.MOVED: "~",
    ChangeKind.TYPE_CHANGED: "T",
    ChangeKind.UNCHANGED: "=",
}


def format_size_change(delta: int) -> str:
    sign = "+" if delta >= 0 else "-"
    return f"{sign}{format_size(abs(delta))}"


def _display_path(change: ChangeRecord) -> str:
    suffix = "/" if change.is_directory else ""
    return f"{change.path}{suffix}"


def format_change_line(change: ChangeRecord, show_size: bool = False) -> str:
    """Render one change as ``<marker> <path>`` plus kind-specific detail."""
    marker = CHANGE_MARKERS[change.change_kind]
    line = f"{marker} {_display_path(change)}"
    kind = change.change_kind
    if kind is ChangeKind.MOVED and change.old is not None and change.similarity_score is not None:
        line += f"  (from {change.old.path}, similarity {change.similarity_score:.2f})"
    elif kind is ChangeKind.TYPE_CHANGED and change.old is not None and change.new is not None:
        line += f"  ({change.old.kind.value} -> {change.new.kind.value})"
    elif kind is ChangeKind.MODIFIED and show_size and change.size_delta:
        line += f"  ({format_size_change(change.size_delta)})"
    elif show_size and kind in (ChangeKind.ADDED, ChangeKind.REMOVED) and not change.is_directory:
        record = change.new if kind is ChangeKind.ADDED else change.old
        if record is not None and record.size is not None:
            line += f"  ({format_size(record.size)})"
    return line


def _plural(count: int, singular: str, plural: str) -> str:
    return f"{count} {singular if count == 1 else plural}"


def _split_line(directories: int, files: int, verb: str, marker: str) -> str | None:
    parts = []
    if directories:
        parts.append(f"{_plural(directories, 'directory', 'directories')} {verb}")
    if files:
        parts.append(f"{_plural(files, 'file', 'files')} {verb}")
    if not parts:
        return None
    return f"  {', '.join(parts)} ({marker})"


def format_summary_lines(summary: DiffSummary) -> list[str]:
    """Render the aggregate counts block."""
    lines = ["Changes Summary:"]
    for line in (
        _split_line(summary.directories_added, summary.files_added, "added", "+"),
        _split_line(summary.directories_removed, summary.files_removed, "removed", "-"),
        _split_line(summary.directories_moved, summary.files_moved, "moved/renamed", "~"),
    ):
        if line is not None:
            lines.append(line)
    if summary.modified:
        lines.append(f"  {summary.modified} modified (M)")
    if summary.type_changed:
        lines.append(f"  {summary.type_changed} type changes (T)")
    if summary.unchanged:
        lines.append(f"  {summary.unchanged} unchanged (=)")
    if summary.total_changes == 0:
        lines.append("  no changes")
    if summary.size_change:
        lines.append(f"  net size change: {format_size_change(summary.size_change)}")
    return lines


def format_change_set(change_set: ChangeSet, show_size: bool = False, stats_only: bool = False) -> list[str]:
    """Render change lines followed by the summary block."""
    lines: list[str] = []
    if not stats_only:
        lines.extend(format_change_line(change, show_size) for change in change_set.changes)
        if lines:
            lines.append("")
    lines.extend(format_summary_lines(change_set.summary))
    return lines


__all__ = [
    "CHANGE_MARKERS",
    "format_size_change",
    "format_change_line",
    "format_summary_lines",
    "format_change_set",
]
