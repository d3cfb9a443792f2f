"""Balance analysis: career baselines, metrics, and reports."""

from paddock.balance.baselines import generate_baseline, load_baseline, save_baseline
from paddock.balance.metrics import (
    compute_global_metrics,
    compute_race_metrics,
    compute_training_metrics,
)
from paddock.balance.models import (
    CareerBaseline,
    GlobalMetrics,
    RaceMetrics,
    TrainingMetrics,
)
from paddock.balance.report import generate_text_report

__all__ = [
    "CareerBaseline",
    "GlobalMetrics",
    "RaceMetrics",
    "TrainingMetrics",
    "compute_global_metrics",
    "compute_race_metrics",
    "compute_training_metrics",
    "generate_baseline",
    "generate_text_report",
    "load_baseline",
    "save_baseline",
]
