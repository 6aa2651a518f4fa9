"""JSON persistence for node-record snapshots.

A snapshot file is a JSON array of objects, one per record, in pre-order.
``path`` and ``kind`` are required; ``depth`` is recomputed from the path when
absent and every metadata field is optional.
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from pathlib import Path

from ..errors import SnapshotFormatError
from ..tree_model.types import NodeKind, NodeRecord, path_depth

logger = logging.getLogger(__name__)

_INT_FIELDS = ("size", "line_count", "word_count")
_FLOAT_FIELDS = ("modified_time", "change_time", "create_time")
_OPTIONAL_FIELDS = (
    "size",
    "modified_time",
    "content_fingerprint",
    "change_time",
    "create_time",
    "line_count",
    "word_count",
    "custom_score",
)


def record_to_dict(record: NodeRecord) -> dict[str, object]:
    """Serialize one record, omitting unset optional fields."""
    data: dict[str, object] = {
        "path": record.path,
        "kind": record.kind.value,
        "depth": record.depth,
    }
    for name in _OPTIONAL_FIELDS:
        value = getattr(record, name)
        if value is not None:
            data[name] = value
    return data


def _is_number(value: object) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def record_from_dict(data: object, index: int = 0) -> NodeRecord:
    """Decode one snapshot object; ``index`` only feeds error messages."""
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"entry {index}: expected an object, got {type(data).__name__}")

    path = data.get("path")
    if not isinstance(path, str) or not path or path.startswith("/") or path.endswith("/"):
        raise SnapshotFormatError(f"entry {index}: invalid path {path!r}")
    if "" in path.split("/"):
        raise SnapshotFormatError(f"entry {index}: invalid path {path!r}")

    raw_kind = data.get("kind")
    try:
        kind = NodeKind(raw_kind)
    except ValueError as exc:
        raise SnapshotFormatError(f"entry {index}: invalid kind {raw_kind!r}") from exc

    expected_depth = path_depth(path)
    depth = data.get("depth", expected_depth)
    if isinstance(depth, bool) or not isinstance(depth, int) or depth != expected_depth:
        raise SnapshotFormatError(f"entry {index}: depth {depth!r} does not match path {path!r}")

    values: dict[str, object] = {}
    for name in _INT_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise SnapshotFormatError(f"entry {index}: {name} must be a non-negative integer")
        values[name] = value
    for name in _FLOAT_FIELDS:
        value = data.get(name)
        if value is None:
            continue
        if not _is_number(value) or not math.isfinite(value):
            raise SnapshotFormatError(f"entry {index}: {name} must be a number")
        values[name] = float(value)

    fingerprint = data.get("content_fingerprint")
    if fingerprint is not None and not isinstance(fingerprint, str):
        raise SnapshotFormatError(f"entry {index}: content_fingerprint must be a string")
    custom_score = data.get("custom_score")
    if custom_score is not None and not (_is_number(custom_score) or isinstance(custom_score, str)):
        raise SnapshotFormatError(f"entry {index}: custom_score must be a number or string")

    return NodeRecord(
        path=path,
        kind=kind,
        depth=depth,
        content_fingerprint=fingerprint,
        custom_score=custom_score,
        **values,
    )


def records_to_json(records: Iterable[NodeRecord]) -> str:
    return json.dumps([record_to_dict(record) for record in records], indent=2) + "\n"


def records_from_json(text: str) -> list[NodeRecord]:
    """Decode a snapshot document into records.

    Raises ``SnapshotFormatError`` for invalid JSON, a non-array document, or
    any entry that does not describe a valid record.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise SnapshotFormatError(f"snapshot is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise SnapshotFormatError("snapshot must be a JSON array of records")
    return [record_from_dict(item, index) for index, item in enumerate(data)]


def save_snapshot(path: Path, records: Iterable[NodeRecord]) -> None:
    """Write ``records`` to ``path`` as a JSON snapshot."""
    payload = records_to_json(records)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(payload, encoding="utf-8")
    logger.debug("saved snapshot %s", path)


def load_snapshot(path: Path) -> list[NodeRecord]:
    """Read a snapshot written by ``save_snapshot``."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SnapshotFormatError(f"cannot read snapshot {path}: {exc}") from exc
    records = records_from_json(text)
    logger.debug("loaded snapshot %s: %d records", path, len(records))
    return records


__all__ = [
    "record_to_dict",
    "record_from_dict",
    "records_to_json",
    "records_from_json",
    "save_snapshot",
    "load_snapshot",
]
