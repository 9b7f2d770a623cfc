from __future__ import annotations

"""Session report: metrics, smoothed trends and plots for quest completions."""

from pathlib import Path
from typing import Iterable, Mapping, Optional

import pandas as pd

from knowi.results.schema import QuestCompletion

from .config import AnalyticsConfig
from .metrics import summarize_by_quest
from .plots import plot_quest_summary, plot_trend
from .prepare import load_and_prepare
from .smoothing import ewma_by_session

SNAPSHOT_COLS = [
    "quest_title",
    "completed_at",
    "score",
    "time_spent_s",
    "expected_s",
    "time_ratio",
    "time_factor",
    "mark",
    "mark_smooth",
]


def write_report(
    completions: Iterable[QuestCompletion],
    outdir: Path,
    *,
    expected_seconds: Optional[Mapping[str, float]] = None,
    cfg: Optional[AnalyticsConfig] = None,
) -> pd.DataFrame:
    """Write per-quest trend plots, a summary chart and a CSV snapshot to outdir.

    Returns the per-quest summary frame.
    """
    cfg = cfg or AnalyticsConfig()
    df = load_and_prepare(completions, cfg, expected_seconds)
    df = ewma_by_session(df, value_col="mark", span=cfg.smoothing_span)

    outdir = Path(outdir)
    outdir.mkdir(exist_ok=True, parents=True)

    for i, quest in enumerate(df["quest_title"].dropna().unique()):
        plot_trend(df, quest=str(quest), value_col="mark", save_path=outdir / f"trend_{i}.png")
    summary = summarize_by_quest(df)
    plot_quest_summary(summary, save_path=outdir / "quest_summary.png")

    df[[c for c in SNAPSHOT_COLS if c in df.columns]].to_csv(outdir / "analytics_snapshot.csv", index=False)
    return summary
