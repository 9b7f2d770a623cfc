from __future__ import annotations

"""Smoothing utilities (EWMA per quest)."""

import pandas as pd


def ewma_by_session(
    df: pd.DataFrame,
    value_col: str,
    span: int,
    group_cols: list[str] | None = None,
    order_col: str = "attempt_idx",
) -> pd.DataFrame:
    """Exponentially weighted mean of value_col within each quest, in attempt order.

    Returns a sorted copy of df with an added ``{value_col}_smooth`` column.
    """
    group_cols = group_cols or ["quest_title"]
    g = df.sort_values(order_col, kind="stable").copy()
    if g.empty:
        g[f"{value_col}_smooth"] = pd.Series(dtype="float32")
        return g
    smooth = g.groupby(group_cols, observed=True)[value_col].transform(lambda s: s.ewm(span=span).mean())
    g[f"{value_col}_smooth"] = smooth.astype("float32")
    return g
