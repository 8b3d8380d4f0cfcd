from __future__ import annotations

"""Export a history frame to Parquet or NDJSON."""

import os
from pathlib import Path

import pandas as pd


def export_history(df: pd.DataFrame, out_path: str | os.PathLike[str]) -> Path:
    """Write df by suffix: .parquet (pyarrow, zstd) or line-delimited JSON otherwise."""
    p = Path(out_path)
    p.parent.mkdir(parents=True, exist_ok=True)
    if p.suffix.lower() == ".parquet":
        df.to_parquet(p, engine="pyarrow", compression="zstd", index=False)
    else:
        df.to_json(p, orient="records", lines=True)
    return p
