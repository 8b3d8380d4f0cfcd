from .config import AnalyticsConfig
from .export import export_history
from .metrics import compute_metrics
from .prepare import history_frame
from .smoothing import ewma_by_session
from .plots import plot_history, plot_duration

__all__ = [
    "AnalyticsConfig",
    "export_history",
    "compute_metrics",
    "history_frame",
    "ewma_by_session",
    "plot_history",
    "plot_duration",
]
