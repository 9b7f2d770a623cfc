from __future__ import annotations

"""Turn quest completion records into a typed DataFrame."""

from typing import Iterable, Mapping, Optional

import pandas as pd

from knowi.results.schema import QuestCompletion

from .config import AnalyticsConfig
from .metrics import compute_metrics

DTYPES = {
    "quest_title": "string",
    "score": "float32",
    "time_spent_s": "float32",
    "completed_at": pd.DatetimeTZDtype(tz="UTC"),
    "expected_s": "float32",
}


def _empty_df() -> pd.DataFrame:
    return pd.DataFrame({k: pd.Series(dtype=v) for k, v in DTYPES.items()})


def completions_frame(
    completions: Iterable[QuestCompletion],
    expected_seconds: Optional[Mapping[str, float]] = None,
) -> pd.DataFrame:
    """One row per completion, sorted by completion time.

    ``expected_seconds`` maps quest titles to their expected duration; quests
    missing from it get NaN.
    """
    rows = [c.model_dump() for c in completions]
    if not rows:
        return _empty_df()
    df = pd.DataFrame(rows)
    lookup = dict(expected_seconds or {})
    df["expected_s"] = df["quest_title"].map(lookup)
    for col, dt in DTYPES.items():
        df[col] = df[col].astype(dt)
    df = df.sort_values(["completed_at", "quest_title"], kind="stable").reset_index(drop=True)
    return df[list(DTYPES.keys())]


def load_and_prepare(
    completions: Iterable[QuestCompletion],
    cfg: AnalyticsConfig,
    expected_seconds: Optional[Mapping[str, float]] = None,
) -> pd.DataFrame:
    """Build the frame, compute metrics, and add a per-quest attempt index."""
    df = completions_frame(completions, expected_seconds)
    df = compute_metrics(df, cfg)
    df["attempt_idx"] = df.groupby("quest_title").cumcount().astype("int64")
    return df
