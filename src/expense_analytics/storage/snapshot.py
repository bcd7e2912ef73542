from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from ..analytics.models import TransactionRecord, records_from_dicts
from ..errors import SnapshotError

logger = logging.getLogger(__name__)


def _read_items(path: Path) -> list[dict[str, Any]]:
    text = path.read_text(encoding="utf-8")

    if path.suffix.lower() == ".jsonl":
        items: list[dict[str, Any]] = []
        for n, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                continue
            try:
                items.append(json.loads(line))
            except json.JSONDecodeError as e:
                raise SnapshotError(f"{path}:{n}: invalid JSON line ({e.msg})") from e
        return items

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotError(f"{path}: invalid JSON ({e.msg})") from e

    # either a bare list or {"records": [...]}
    if isinstance(data, dict):
        data = data.get("records")
    if not isinstance(data, list):
        raise SnapshotError(f"{path}: expected a list of records")
    return data


def load_snapshot(path: Path | str) -> list[TransactionRecord]:
    """
    Read a record snapshot from a .json (list or {"records": [...]}) or
    .jsonl file. Read-only: the engine never writes records back.
    """
    p = Path(path)
    if not p.exists():
        raise SnapshotError(f"Snapshot file not found: {p}")

    items = _read_items(p)
    for n, it in enumerate(items, start=1):
        if not isinstance(it, dict):
            raise SnapshotError(f"{p}: record #{n} is not an object")

    try:
        records = records_from_dicts(items)
    except ValidationError as e:
        raise SnapshotError(f"{p}: invalid record ({e.error_count()} errors)") from e

    logger.debug("load_snapshot: %s records=%d", p, len(records))
    return records
