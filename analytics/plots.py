from __future__ import annotations

"""Matplotlib plots for the score-history series."""

import os
from typing import Optional

import matplotlib.pyplot as plt
import pandas as pd


def plot_history(
    df: pd.DataFrame,
    *,
    target: Optional[float] = None,
    save_path: Optional[str | os.PathLike[str]] = None,
) -> bool:
    """Accuracy per session (0..100), with the EWMA line when present.

    Returns False without drawing when there is no history.
    """
    if df.empty:
        return False
    g = df.sort_values("session_idx")
    plt.figure()
    plt.plot(g["session_idx"], g["accuracy"], marker="o", label="accuracy")
    if "accuracy_smooth" in g.columns:
        plt.plot(g["session_idx"], g["accuracy_smooth"], linewidth=2, label="accuracy (EWMA)")
    if target is not None:
        plt.axhline(target, linestyle="--", linewidth=1, color="grey", label="target")
    plt.ylim(0, 100)
    plt.xlabel("Session")
    plt.ylabel("Accuracy (%)")
    plt.title("Score History")
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True


def plot_duration(
    df: pd.DataFrame,
    *,
    save_path: Optional[str | os.PathLike[str]] = None,
) -> bool:
    if df.empty:
        return False
    g = df.sort_values("session_idx")
    plt.figure()
    plt.bar(g["session_idx"], g["duration"])
    plt.xlabel("Session")
    plt.ylabel("Duration (s)")
    plt.title("Session Duration")
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True
