from __future__ import annotations

"""Smoothing utilities (EWMA over session order)."""

import pandas as pd


def ewma_by_session(df: pd.DataFrame, value_col: str, span: int) -> pd.DataFrame:
    """Return a copy sorted by session_idx with a new f"{value_col}_smooth" column."""
    g = df.sort_values("session_idx").copy()
    g[f"{value_col}_smooth"] = g[value_col].astype("float64").ewm(span=span).mean()
    return g
