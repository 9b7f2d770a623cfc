from __future__ import annotations

"""Metric computations for per-completion analytics."""

import numpy as np
import pandas as pd

from .config import AnalyticsConfig


def compute_metrics(df: pd.DataFrame, cfg: AnalyticsConfig) -> pd.DataFrame:
    """Compute normalized score, time ratio, overtime factor and composite mark.

    Returns a copy with added columns:
    - score_norm, time_ratio, time_factor, mark
    """
    out = df.copy()
    out["score_norm"] = (out["score"].astype("float32") / float(cfg.score_ref)).clip(0, 1).astype("float32")

    # NaN where the quest has no expected duration
    expected = out["expected_s"].astype("float32").where(out["expected_s"] > 0)
    out["time_ratio"] = (out["time_spent_s"].astype("float32") / expected).astype("float32")

    # Only overtime is penalized: exp(-alpha * max(0, ratio - 1)); unknown ratio counts as on time
    over = (out["time_ratio"] - 1.0).clip(lower=0).fillna(0.0)
    out["time_factor"] = np.exp(-float(cfg.alpha) * over.astype("float32")).astype("float32")

    out["mark"] = (out["score_norm"] * out["time_factor"]).clip(0, 1).astype("float32")
    return out


def summarize_by_quest(df: pd.DataFrame) -> pd.DataFrame:
    """Per-quest totals: completions, mean score and mark, total time."""
    if df.empty:
        return pd.DataFrame(columns=["quest_title", "completions", "score_mean", "mark_mean", "time_total_s"])
    g = df.groupby("quest_title", observed=True)
    summary = pd.DataFrame(
        {
            "completions": g["score"].size(),
            "score_mean": g["score"].mean().astype("float32"),
            "mark_mean": g["mark"].mean().astype("float32"),
            "time_total_s": g["time_spent_s"].sum().astype("float32"),
        }
    )
    return summary.reset_index().sort_values("mark_mean", ascending=False, kind="stable").reset_index(drop=True)
