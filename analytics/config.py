from __future__ import annotations

"""Analytics configuration (hyperparameters) using Pydantic."""

from pydantic import BaseModel, Field


class AnalyticsConfig(BaseModel):
    """Hyperparameters for quest metrics and smoothing.

    - alpha: overtime penalty scale (>0)
    - score_ref: score treated as a perfect result (>0)
    - smoothing_span: EWMA span in completions (>1)
    """

    alpha: float = Field(0.9, gt=0)
    score_ref: float = Field(100.0, gt=0)
    smoothing_span: int = Field(5, gt=1)
