from __future__ import annotations

"""Aggregate metrics over the score history."""

from typing import Any, Dict

import numpy as np
import pandas as pd

from .config import AnalyticsConfig


def compute_metrics(df: pd.DataFrame, cfg: AnalyticsConfig) -> Dict[str, Any]:
    """Summarize a history frame.

    Returns sessions, questions_attempted, mean/best/last accuracy,
    mean_duration_s, on_target_share and the accuracy trend (slope of a
    least-squares line, percentage points per session).
    """
    n = int(len(df))
    if n == 0:
        return {
            "sessions": 0,
            "questions_attempted": 0,
            "mean_accuracy": 0.0,
            "best_accuracy": 0.0,
            "last_accuracy": 0.0,
            "mean_duration_s": 0.0,
            "on_target_share": 0.0,
            "trend": 0.0,
        }
    acc = df["accuracy"].astype("float64").to_numpy()
    if n > 1:
        slope = float(np.polyfit(df["session_idx"].astype("float64").to_numpy(), acc, 1)[0])
    else:
        slope = 0.0
    return {
        "sessions": n,
        "questions_attempted": int(df["total"].sum()),
        "mean_accuracy": round(float(acc.mean()), 2),
        "best_accuracy": round(float(acc.max()), 2),
        "last_accuracy": round(float(acc[-1]), 2),
        "mean_duration_s": round(float(df["duration"].mean()), 1),
        "on_target_share": round(float((acc >= cfg.target_accuracy).mean()), 3),
        "trend": round(slope, 3),
    }
