"""Text formatting for flattened record sequences."""

from __future__ import annotations

from collections.abc import Sequence

from .types import NodeKind, NodeRecord

_SIZE_UNITS = ("B", "K", "M", "G", "T")


def format_size(size: int) -> str:
    """Return a short human size label such as ``512B`` or ``1.5M``."""
    value = float(size)
    for unit in _SIZE_UNITS:
        if value < 1024 or unit == _SIZE_UNITS[-1]:
            if unit == "B":
                return f"{int(value)}B"
            return f"{value:.1f}{unit}"
        value /= 1024
    return f"{size}B"


def last_sibling_flags(records: Sequence[NodeRecord]) -> list[bool]:
    """Flag each record that has no later sibling in pre-order output."""
    flags = [False] * len(records)
    seen_depths: set[int] = set()
    for index in range(len(records) - 1, -1, -1):
        depth = records[index].depth
        seen_depths = {seen for seen in seen_depths if seen <= depth}
        flags[index] = depth not in seen_depths
        seen_depths.add(depth)
    return flags


def format_record_label(record: NodeRecord, show_size: bool = False) -> str:
    name = record.name + ("/" if record.kind is NodeKind.DIRECTORY else "")
    if show_size and record.size is not None and not record.is_dir:
        return f"[{format_size(record.size):>6}]  {name}"
    return name


def format_tree_lines(
    records: Sequence[NodeRecord],
    root_label: str = ".",
    show_size: bool = False,
    show_summary: bool = True,
) -> list[str]:
    """Render records as ``tree``-style connector lines under ``root_label``."""
    lines = [root_label]
    # One flag per open ancestor level: True while that ancestor has later siblings.
    open_levels: list[bool] = []
    for record, is_last in zip(records, last_sibling_flags(records)):
        del open_levels[record.depth:]
        prefix = "".join("│   " if more else "    " for more in open_levels)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{format_record_label(record, show_size)}")
        open_levels.append(not is_last)

    if show_summary:
        directories = sum(1 for record in records if record.is_dir)
        files = len(records) - directories
        lines.append("")
        lines.append(
            f"{directories} {'directory' if directories == 1 else 'directories'}, "
            f"{files} {'file' if files == 1 else 'files'}"
        )
    return lines


__all__ = [
    "format_size",
    "last_sibling_flags",
    "format_record_label",
    "format_tree_lines",
]
