from __future__ import annotations

"""Append-only JSON ledger of completed-session summaries.

File layout (one slot, a flat list, oldest first):

[
  {"date": "2025-03-01 18:02:11", "score": 7, "total": 9, "accuracy": "77.78", "duration": 312},
  ...
]

Notes:
- Reads never raise: a missing, unreadable or corrupt file is an empty history.
- Entries that fail validation are skipped on read; the rest are kept.
- Writes go through a temp file + replace and are retried once.
"""

import json
import os
from pathlib import Path
from typing import Any, List

from pydantic import ValidationError

from ..app.explain import warn
from .schema import HistoryEntry

WRITE_ATTEMPTS = 2


class StorageError(OSError):
    """The ledger could not be written."""


def _load(path: Path) -> List[Any]:
    if not path.exists():
        return []
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        warn(f"score history at {path} is unreadable ({exc}); treating it as empty")
        return []
    if not isinstance(data, list):
        warn(f"score history at {path} is not a list; treating it as empty")
        return []
    return data


def _save(path: Path, rows: List[dict]) -> None:
    last_exc: OSError | None = None
    for _ in range(WRITE_ATTEMPTS):
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as f:
                json.dump(rows, f, indent=2)
            os.replace(tmp, path)
            return
        except OSError as exc:
            last_exc = exc
            if tmp.is_file():
                tmp.unlink()
    raise StorageError(f"could not write score history to {path}: {last_exc}") from last_exc


class HistoryLedger:
    """Durable, ordered sequence of HistoryEntry records in one JSON file."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def read_all(self) -> List[HistoryEntry]:
        entries: List[HistoryEntry] = []
        for i, raw in enumerate(_load(self.path)):
            try:
                entries.append(HistoryEntry.model_validate(raw))
            except ValidationError as exc:
                warn(f"skipping invalid history entry #{i + 1}: {exc.errors()[0].get('msg', exc)}")
        return entries

    def append(self, entry: HistoryEntry) -> None:
        """Add entry at the end. Raises StorageError when the write fails twice."""
        rows = [e.model_dump() for e in self.read_all()]
        rows.append(HistoryEntry.model_validate(entry).model_dump())
        _save(self.path, rows)

    def clear(self) -> None:
        _save(self.path, [])

    def __len__(self) -> int:
        return len(self.read_all())
