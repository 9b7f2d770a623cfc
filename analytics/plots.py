from __future__ import annotations

"""Matplotlib plots for quest score trends and per-quest summaries."""

import os
from typing import Optional

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt


def plot_trend(
    df: pd.DataFrame,
    *,
    quest: Optional[str] = None,
    value_col: str = "mark",
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> bool:
    """Scatter of value_col over attempts, with the EWMA line when present.

    Returns False when there is nothing to plot.
    """
    g = df.copy()
    if quest is not None:
        g = g[g["quest_title"].astype("string") == quest]
    if g.empty:
        return False
    g = g.sort_values("attempt_idx")
    plt.figure()
    plt.plot(g["attempt_idx"], g[value_col], marker="o", linestyle="", label=value_col)
    smooth_col = f"{value_col}_smooth"
    if smooth_col in g.columns:
        plt.plot(g["attempt_idx"], g[smooth_col], linewidth=2, label=f"{value_col} (EWMA)")
    plt.xlabel("Attempt")
    plt.ylabel(value_col)
    plt.title(f"Trend: {quest}" if quest else "Trend")
    plt.legend()
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True


def plot_quest_summary(
    summary: pd.DataFrame,
    *,
    value_col: str = "mark_mean",
    save_path: Optional[str | bytes | "os.PathLike[str]"] = None,
) -> bool:
    if summary.empty:
        return False
    labels = summary["quest_title"].astype(str).tolist()
    x = np.arange(len(labels))
    plt.figure()
    plt.bar(x, summary[value_col].to_numpy(dtype="float32"))
    plt.xticks(ticks=x, labels=labels, rotation=20, ha="right")
    plt.ylabel(value_col)
    plt.title(f"Quest summary ({value_col})")
    if save_path:
        plt.savefig(save_path, bbox_inches="tight", dpi=150)
    plt.close()
    return True
