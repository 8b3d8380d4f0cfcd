from __future__ import annotations

"""Turn ledger entries into a typed DataFrame."""

from typing import Iterable

import pandas as pd

from quizrunner.storage.schema import HistoryEntry

DTYPES = {
    "session_idx": "int64",
    "date": "string",
    "score": "int64",
    "total": "int64",
    "accuracy": "float64",
    "duration": "int64",
}


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def history_frame(entries: Iterable[HistoryEntry]) -> pd.DataFrame:
    """One row per completed session, oldest first.

    - session_idx is the 1-based ledger position (the chart x-axis).
    - accuracy is parsed from its two-decimal string form.
    - missing durations from older entries are 0.
    """
    rows = [
        {
            "session_idx": i,
            "date": e.date,
            "score": e.score,
            "total": e.total,
            "accuracy": e.accuracy_value,
            "duration": int(e.duration or 0),
        }
        for i, e in enumerate(entries, start=1)
    ]
    if not rows:
        return _empty_df()
    df = pd.DataFrame(rows)
    return df.astype(DTYPES)[list(DTYPES.keys())]
