from .config import AnalyticsConfig
from .metrics import compute_metrics, summarize_by_quest
from .prepare import completions_frame, load_and_prepare
from .smoothing import ewma_by_session
from .plots import plot_trend, plot_quest_summary
from .report import write_report

__all__ = [
    "AnalyticsConfig",
    "compute_metrics",
    "summarize_by_quest",
    "completions_frame",
    "load_and_prepare",
    "ewma_by_session",
    "plot_trend",
    "plot_quest_summary",
    "write_report",
]
